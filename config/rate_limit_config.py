# config/rate_limit_config.py

from typing import Dict, TypedDict


class RateLimitConfig(TypedDict):
    """A sliding-window budget."""
    requests: int
    window_seconds: int


RATE_LIMITS: Dict[str, RateLimitConfig] = {
    # AI generation endpoints
    "strict": {
        "requests": 10,
        "window_seconds": 60,
    },
    # Write operations (create, update, delete)
    "moderate": {
        "requests": 30,
        "window_seconds": 60,
    },
    # Read operations
    "lenient": {
        "requests": 100,
        "window_seconds": 60,
    },
}

# Identifiers idle for longer than this are dropped by the sweep
SWEEP_MAX_AGE_SECONDS = 300
# Sweep eagerly once this many identifiers are tracked
MAX_TRACKED_IDENTIFIERS = 10000


def get_rate_limit(tier: str) -> RateLimitConfig:
    """Safely get the budget for a given tier."""
    return RATE_LIMITS.get(tier, RATE_LIMITS["moderate"])
