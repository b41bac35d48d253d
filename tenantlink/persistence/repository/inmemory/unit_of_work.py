"""In-memory unit of work for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from tenantlink.domain.error import StoreUnavailableError
from tenantlink.domain.repository import UnitOfWork

from .database import InMemorySession


class InMemoryUnitOfWork(UnitOfWork):
    """Undoes every write of a failed transaction via the session journal.

    A block that completes commits the session, so its writes are final and
    its row locks released before the caller sees the result.
    """

    def __init__(self, session: InMemorySession) -> None:
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        savepoint = self.session.savepoint()
        try:
            yield
        except BaseException:
            self.session.rollback_to(savepoint)
            raise

        try:
            self.session.commit()
        except OSError as e:
            self.session.rollback()
            raise StoreUnavailableError(f"commit: {e.__class__.__name__}") from e
