"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Groups repository writes into one atomic step.

    Repository calls made inside ``transaction()`` either all take effect or
    none do. Leaving the block by exception rolls back every write made in
    it. Leaving it normally commits, so the writes are durable and row locks
    released before the caller continues. A failed commit raises
    StoreUnavailableError with nothing written.

    Example:
        async with uow.transaction():
            invite = await invites.lock_by_token_hash(token_hash, 3.0)
            await links.create_if_absent(link)
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block."""
        pass
