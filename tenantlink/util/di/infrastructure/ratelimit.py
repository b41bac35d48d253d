"""Rate limiter infrastructure providers."""

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenantlink.adapter.ratelimit import PostgresRateLimiter, SlidingWindowRateLimiter
from tenantlink.config import RateLimitSettings
from tenantlink.domain.service import RateLimiter
from tenantlink.util.di.base import ProviderBase


class RateLimitProvider(ProviderBase):
    """Rate limiter component base.

    The Postgres backend needs a real session factory.
    """

    __mock_component__ = "ratelimit"
    __depends_on__ = {"persistence"}


class ProdRateLimitProvider(RateLimitProvider):
    """Production rate limiter, backend chosen by RATE_LIMIT__BACKEND."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_rate_limiter(
        self,
        settings: RateLimitSettings,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> RateLimiter:
        """Provide the configured rate limiter."""
        logfire.info(
            "Rate limiter configured",
            backend=settings.backend,
            max_attempts=settings.max_attempts,
            window_seconds=settings.window_seconds,
        )
        if settings.backend == "postgres":
            return PostgresRateLimiter(
                session_factory=session_factory,
                max_attempts=settings.max_attempts,
                window_seconds=settings.window_seconds,
                stale_after_seconds=settings.stale_after_hours * 3600,
            )
        return SlidingWindowRateLimiter(
            max_attempts=settings.max_attempts,
            window_seconds=settings.window_seconds,
            stale_after_seconds=settings.stale_after_hours * 3600,
        )
