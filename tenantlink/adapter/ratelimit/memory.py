"""In-process sliding window rate limiter."""

import math
import time
from collections import deque
from threading import Lock
from typing import Callable

from tenantlink.domain.service.rate_limiter import RateLimiter
from tenantlink.domain.value import RateLimitDecision


class SlidingWindowRateLimiter(RateLimiter):
    """Allows at most ``max_attempts`` per key in any rolling window.

    State lives in this process only; each worker enforces its own budget.
    Denied attempts are not counted, so a caller that backs off for the
    advertised delay is let through again. Keys idle longer than
    ``stale_after_seconds`` are dropped by ``check`` itself at most once per
    that interval, so memory stays bounded without an external sweep.
    """

    def __init__(
        self,
        max_attempts: int,
        window_seconds: float,
        stale_after_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize limiter.

        Args:
            max_attempts: Attempts allowed per window
            window_seconds: Window length
            stale_after_seconds: Idle time after which a key is forgotten
            clock: Monotonic time source in seconds
        """
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.stale_after_seconds = stale_after_seconds
        self._clock = clock
        self._attempts: dict[str, deque[float]] = {}
        self._lock = Lock()
        self._last_sweep = clock()

    async def check(self, key: str) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.stale_after_seconds:
                self._drop_stale(now)

            attempts = self._attempts.setdefault(key, deque())
            cutoff = now - self.window_seconds
            while attempts and attempts[0] <= cutoff:
                attempts.popleft()

            if len(attempts) >= self.max_attempts:
                retry_after = max(1, math.ceil(attempts[0] + self.window_seconds - now))
                return RateLimitDecision(allowed=False, retry_after_seconds=retry_after)

            attempts.append(now)
            return RateLimitDecision(allowed=True)

    async def purge_stale(self) -> int:
        now = self._clock()
        with self._lock:
            return self._drop_stale(now)

    def _drop_stale(self, now: float) -> int:
        stale = [
            key
            for key, attempts in self._attempts.items()
            if not attempts or now - attempts[-1] > self.stale_after_seconds
        ]
        for key in stale:
            del self._attempts[key]
        self._last_sweep = now
        return len(stale)
