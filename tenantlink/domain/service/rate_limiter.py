"""Rate limiter interface."""

from abc import ABC, abstractmethod

from tenantlink.domain.value import RateLimitDecision


class RateLimiter(ABC):
    """Caps attempts per scope key over a time window.

    Counters are best effort and live outside the invite transaction. Losing
    them only relaxes the limit for one window.
    """

    @abstractmethod
    async def check(self, key: str) -> RateLimitDecision:
        """Record one attempt for a key and decide whether it may proceed.

        Args:
            key: Scope key, e.g. ``validate-invite:203.0.113.7``

        Returns:
            Decision with a retry hint when denied
        """
        pass

    @abstractmethod
    async def purge_stale(self) -> int:
        """Drop counters that have been idle long enough to be irrelevant.

        Returns:
            Number of entries removed
        """
        pass
