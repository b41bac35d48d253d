"""Shared in-memory tables with per-session undo and row locks."""

import asyncio
from typing import Any, Hashable

from tenantlink.domain.error import LockTimeoutError
from tenantlink.domain.model import Invite, Profile, Property, TenantPropertyLink
from tenantlink.domain.value import InviteId, LinkId, PropertyId, UserId

_MISSING = object()


class InMemoryDatabase:
    """Tables shared by every session of one container."""

    def __init__(self) -> None:
        self.invites: dict[InviteId, Invite] = {}
        self.links: dict[LinkId, TenantPropertyLink] = {}
        self.properties: dict[PropertyId, Property] = {}
        self.profiles: dict[UserId, Profile] = {}
        self._row_locks: dict[Hashable, asyncio.Lock] = {}

    def row_lock(self, key: Hashable) -> asyncio.Lock:
        return self._row_locks.setdefault(key, asyncio.Lock())

    def is_row_locked(self, key: Hashable) -> bool:
        lock = self._row_locks.get(key)
        return lock is not None and lock.locked()


class InMemorySession:
    """One request's view of the shared tables.

    Writes apply immediately and are journaled so they can be undone back to
    a savepoint. Row locks are held until commit or rollback, like a
    database session holding FOR UPDATE locks until its transaction ends.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database
        self._undo: list[tuple[dict, Any, Any]] = []
        self._held: dict[Hashable, asyncio.Lock] = {}

    def put(self, table: dict, key: Any, value: Any) -> None:
        self._undo.append((table, key, table.get(key, _MISSING)))
        table[key] = value

    def remove(self, table: dict, key: Any) -> None:
        if key in table:
            self._undo.append((table, key, table[key]))
            del table[key]

    def savepoint(self) -> int:
        return len(self._undo)

    def rollback_to(self, savepoint: int) -> None:
        while len(self._undo) > savepoint:
            table, key, previous = self._undo.pop()
            if previous is _MISSING:
                table.pop(key, None)
            else:
                table[key] = previous

    async def lock_row(self, key: Hashable, timeout_seconds: float) -> None:
        """Acquire a row lock for the rest of the session.

        Raises:
            LockTimeoutError: If the lock is not granted in time
        """
        if key in self._held:
            return
        lock = self.database.row_lock(key)
        try:
            await asyncio.wait_for(lock.acquire(), timeout_seconds)
        except asyncio.TimeoutError as e:
            raise LockTimeoutError(f"Row lock on {key} not granted in time") from e
        self._held[key] = lock

    def is_locked_elsewhere(self, key: Hashable) -> bool:
        return key not in self._held and self.database.is_row_locked(key)

    def commit(self) -> None:
        self._undo.clear()
        self._release()

    def rollback(self) -> None:
        self.rollback_to(0)
        self._release()

    def _release(self) -> None:
        for lock in self._held.values():
            lock.release()
        self._held.clear()


async def yield_to_loop() -> None:
    """Stand-in for a database round trip so concurrent tasks interleave."""
    await asyncio.sleep(0)
