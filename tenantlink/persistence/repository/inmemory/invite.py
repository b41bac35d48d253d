"""In-memory invite repository for testing."""

from datetime import datetime
from typing import Optional

from tenantlink.domain.error import DuplicateTokenHashError
from tenantlink.domain.model import Invite
from tenantlink.domain.repository import InviteRepository
from tenantlink.domain.value import InviteId, PropertyId, TokenHash, UserId

from .database import InMemorySession, yield_to_loop


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing."""

    def __init__(self, session: InMemorySession) -> None:
        self.session = session
        self._invites = session.database.invites

    def _by_hash(self, token_hash: TokenHash) -> Optional[Invite]:
        matches = [i for i in self._invites.values() if i.token_hash == token_hash]
        if not matches:
            return None
        live = [i for i in matches if i.deleted_at is None]
        if live:
            return live[0]
        return max(matches, key=lambda i: i.deleted_at)

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        await yield_to_loop()
        return self._invites.get(invite_id)

    async def find_by_token_hash(self, token_hash: TokenHash) -> Optional[Invite]:
        """Find an invite by token hash, preferring a live one."""
        await yield_to_loop()
        return self._by_hash(token_hash)

    async def lock_by_token_hash(
        self, token_hash: TokenHash, timeout_seconds: float
    ) -> Optional[Invite]:
        """Lock the invite row, then re-read it."""
        await yield_to_loop()
        invite = self._by_hash(token_hash)
        if invite is None:
            return None
        await self.session.lock_row(invite.id, timeout_seconds)
        return self._invites.get(invite.id)

    async def create(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Raises:
            DuplicateTokenHashError: If a live invite has the same hash
        """
        await yield_to_loop()
        for existing in self._invites.values():
            if existing.token_hash == invite.token_hash and existing.deleted_at is None:
                raise DuplicateTokenHashError("Token hash already in use")
        self.session.put(self._invites, invite.id, invite)
        return invite

    async def record_validation_attempt(
        self, invite_id: InviteId, attempted_at: datetime
    ) -> bool:
        """Bump counters unless another session holds the row lock."""
        await yield_to_loop()
        invite = self._invites.get(invite_id)
        if invite is None or self.session.is_locked_elsewhere(invite_id):
            return False
        self.session.put(
            self._invites,
            invite_id,
            invite.model_copy(
                update={
                    "validation_attempts": invite.validation_attempts + 1,
                    "last_validation_attempt": attempted_at,
                }
            ),
        )
        return True

    async def mark_accepted(
        self, invite_id: InviteId, tenant_id: UserId, accepted_at: datetime
    ) -> Optional[Invite]:
        """Consume one use if any is left."""
        await yield_to_loop()
        invite = self._invites.get(invite_id)
        if (
            invite is None
            or invite.deleted_at is not None
            or invite.use_count >= invite.max_uses
        ):
            return None
        updated = invite.model_copy(
            update={
                "use_count": invite.use_count + 1,
                "accepted_at": invite.accepted_at or accepted_at,
                "accepted_by": invite.accepted_by or tenant_id,
            }
        )
        self.session.put(self._invites, invite_id, updated)
        return updated

    async def soft_delete(
        self, invite_id: InviteId, revoked_by: Optional[UserId], deleted_at: datetime
    ) -> Optional[Invite]:
        """Soft-delete an invite unless it already is."""
        await yield_to_loop()
        invite = self._invites.get(invite_id)
        if invite is None or invite.deleted_at is not None:
            return invite
        updated = invite.model_copy(
            update={"deleted_at": deleted_at, "revoked_by": revoked_by}
        )
        self.session.put(self._invites, invite_id, updated)
        return updated

    async def find_by_property(self, property_id: PropertyId) -> list[Invite]:
        """List a property's invites, newest first."""
        await yield_to_loop()
        matches = [i for i in self._invites.values() if i.property_id == property_id]
        matches.sort(key=lambda i: i.created_at, reverse=True)
        return matches

    async def soft_delete_stale(self, cutoff: datetime, deleted_at: datetime) -> int:
        """Soft-delete invites expired, or used up, before cutoff."""
        await yield_to_loop()
        stale = [
            i
            for i in self._invites.values()
            if i.deleted_at is None
            and (
                i.expires_at < cutoff
                or (
                    i.use_count >= i.max_uses
                    and i.accepted_at is not None
                    and i.accepted_at < cutoff
                )
            )
        ]
        for invite in stale:
            self.session.put(
                self._invites,
                invite.id,
                invite.model_copy(update={"deleted_at": deleted_at}),
            )
        return len(stale)

    async def purge_deleted(self, cutoff: datetime) -> int:
        """Hard-delete invites soft-deleted before cutoff."""
        await yield_to_loop()
        doomed = [
            i.id
            for i in self._invites.values()
            if i.deleted_at is not None and i.deleted_at < cutoff
        ]
        for invite_id in doomed:
            self.session.remove(self._invites, invite_id)
        return len(doomed)
