"""
Sliding-window rate limiter for ScreenCraft.

One instance per process, owned by the application (app.state.rate_limiter)
and swept periodically by a background task started at startup.
"""
import asyncio
import logging
import time
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from config.rate_limit_config import MAX_TRACKED_IDENTIFIERS, SWEEP_MAX_AGE_SECONDS, RateLimitConfig

logger = logging.getLogger(__name__)


class RateLimiter:
    def __init__(self, clock: Callable[[], float] = time.monotonic,
                 max_tracked: int = MAX_TRACKED_IDENTIFIERS):
        self._clock = clock
        self._max_tracked = max_tracked
        self._requests: Dict[str, List[float]] = defaultdict(list)

    def _recent(self, identifier: str, window_seconds: int, now: float) -> List[float]:
        window_start = now - window_seconds
        return [t for t in self._requests.get(identifier, []) if t > window_start]

    def check(self, identifier: str, config: RateLimitConfig) -> bool:
        """Record a request and return False if it exceeds the budget."""
        now = self._clock()
        recent = self._recent(identifier, config["window_seconds"], now)

        if len(recent) >= config["requests"]:
            self._requests[identifier] = recent
            return False

        recent.append(now)
        self._requests[identifier] = recent

        if len(self._requests) > self._max_tracked:
            self.sweep()
        return True

    def get_remaining(self, identifier: str, config: RateLimitConfig) -> int:
        recent = self._recent(identifier, config["window_seconds"], self._clock())
        return max(0, config["requests"] - len(recent))

    def sweep(self, max_age: int = SWEEP_MAX_AGE_SECONDS) -> int:
        """Drop timestamps older than max_age; return how many identifiers were removed."""
        oldest = self._clock() - max_age
        removed = 0
        for identifier in list(self._requests):
            valid = [t for t in self._requests[identifier] if t > oldest]
            if valid:
                self._requests[identifier] = valid
            else:
                del self._requests[identifier]
                removed += 1
        return removed

    @property
    def tracked(self) -> int:
        return len(self._requests)


async def run_periodic_sweep(limiter: RateLimiter, interval: float, stop: Optional[asyncio.Event] = None):
    """Sweep the limiter every `interval` seconds until cancelled or stopped."""
    while stop is None or not stop.is_set():
        await asyncio.sleep(interval)
        removed = limiter.sweep()
        if removed:
            logger.debug(f"Rate limiter sweep removed {removed} idle identifiers")
