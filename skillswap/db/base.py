"""
SQLAlchemy declarative base and metadata.
Single place for table definitions and migrations.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utc_now() -> datetime:
    """Application-side timestamp default (sub-second precision on every backend)."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models. Enables Alembic migrations."""

    pass
