"""PostgreSQL unit of work."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantlink.domain.repository import UnitOfWork
from tenantlink.persistence.repository.errors import store_error


class PostgresUnitOfWork(UnitOfWork):
    """Unit of work that commits the request session when the block ends.

    The block runs inside a savepoint so a failure undoes only its own
    writes. On success the session is committed before control returns to
    the caller, which releases row locks and makes the writes durable.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work.

        Args:
            session: SQLAlchemy async session shared with the repositories
        """
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            async with self.session.begin_nested():
                yield
        except IntegrityError:
            raise
        except (DBAPIError, OSError) as e:
            raise store_error(e, "transaction") from e

        try:
            await self.session.commit()
        except (DBAPIError, OSError) as e:
            await self.session.rollback()
            raise store_error(e, "commit") from e
