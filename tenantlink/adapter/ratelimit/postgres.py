"""Rate limiter backed by the rate_limits table."""

import math
from datetime import timedelta

import logfire
from sqlalchemy import case, delete
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenantlink.domain.service.rate_limiter import RateLimiter
from tenantlink.domain.value import RateLimitDecision
from tenantlink.persistence.tables import rate_limits_table
from tenantlink.util.time import utcnow


class PostgresRateLimiter(RateLimiter):
    """Fixed window counters shared by every worker.

    Each check is one atomic upsert in its own short transaction, outside the
    request's session, so counted attempts survive a request rollback. If
    the table can't be reached the limiter fails open.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_attempts: int,
        window_seconds: int,
        stale_after_seconds: int,
    ) -> None:
        """Initialize limiter.

        Args:
            session_factory: Factory for short-lived sessions
            max_attempts: Attempts allowed per window
            window_seconds: Window length
            stale_after_seconds: Idle time after which a row is purged
        """
        self.session_factory = session_factory
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.stale_after_seconds = stale_after_seconds

    async def check(self, key: str) -> RateLimitDecision:
        now = utcnow()
        window = timedelta(seconds=self.window_seconds)
        table = rate_limits_table
        window_over = table.c.window_start <= now - window

        stmt = insert(table).values(
            limiter_key=key, window_start=now, attempts=1, updated_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.limiter_key],
            set_={
                "window_start": case((window_over, now), else_=table.c.window_start),
                "attempts": case((window_over, 1), else_=table.c.attempts + 1),
                "updated_at": now,
            },
        ).returning(table.c.attempts, table.c.window_start)

        try:
            async with self.session_factory() as session, session.begin():
                row = (await session.execute(stmt)).one()
        except (SQLAlchemyError, OSError) as e:
            logfire.warn("Rate limit check failed, allowing", key=key, error=str(e))
            return RateLimitDecision(allowed=True)

        if row.attempts <= self.max_attempts:
            return RateLimitDecision(allowed=True)

        remaining = (row.window_start + window - now).total_seconds()
        return RateLimitDecision(
            allowed=False, retry_after_seconds=max(1, math.ceil(remaining))
        )

    async def purge_stale(self) -> int:
        cutoff = utcnow() - timedelta(seconds=self.stale_after_seconds)
        stmt = delete(rate_limits_table).where(rate_limits_table.c.updated_at < cutoff)
        async with self.session_factory() as session, session.begin():
            result = await session.execute(stmt)
        return result.rowcount
