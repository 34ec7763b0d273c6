"""
Prometheus metrics exposed at /metrics.
"""

from prometheus_client import Counter

SWAP_TRANSITIONS = Counter(
    "skillswap_swap_transitions_total",
    "Swap requests entering each status (pending on creation, then the terminal status).",
    ["status"],
)
