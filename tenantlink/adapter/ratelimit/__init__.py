"""Rate limiter implementations."""

from .memory import SlidingWindowRateLimiter
from .postgres import PostgresRateLimiter

__all__ = ["PostgresRateLimiter", "SlidingWindowRateLimiter"]
