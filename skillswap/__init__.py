"""Skill Swap API: peer-to-peer skill exchange backend."""
