"""Invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from tenantlink.domain.model.invite import Invite
from tenantlink.domain.value import InviteId, PropertyId, TokenHash, UserId


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token_hash(self, token_hash: TokenHash) -> Invite | None:
        """Find an invite by token hash without locking.

        A hash may be reused after its previous owner was soft-deleted, so a
        non-deleted invite is preferred over deleted ones.

        Args:
            token_hash: Keyed hash of the candidate token

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def lock_by_token_hash(
        self, token_hash: TokenHash, timeout_seconds: float
    ) -> Invite | None:
        """Find an invite by token hash and hold its row lock.

        Must be called inside a unit-of-work transaction. The lock is held
        until the enclosing session ends.

        Args:
            token_hash: Keyed hash of the candidate token
            timeout_seconds: Maximum time to wait for the lock

        Returns:
            The locked invite if found, None otherwise

        Raises:
            LockTimeoutError: If the lock is not granted in time
            StoreUnavailableError: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def create(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Args:
            invite: The invite to insert

        Returns:
            The inserted invite

        Raises:
            DuplicateTokenHashError: If a non-deleted invite has the same hash
        """
        pass

    @abstractmethod
    async def record_validation_attempt(
        self, invite_id: InviteId, attempted_at: datetime
    ) -> bool:
        """Bump validation bookkeeping without waiting on row locks.

        Args:
            invite_id: The invite that was looked up
            attempted_at: Time of the attempt

        Returns:
            True if the counters were updated, False if the row was busy

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def mark_accepted(
        self, invite_id: InviteId, tenant_id: UserId, accepted_at: datetime
    ) -> Invite | None:
        """Consume one use of an invite.

        Increments use_count only while it is below max_uses. accepted_at and
        accepted_by are written on the first acceptance only.

        Args:
            invite_id: The locked invite
            tenant_id: The redeeming tenant
            accepted_at: Time of acceptance

        Returns:
            The updated invite, or None if no use was left

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def soft_delete(
        self, invite_id: InviteId, revoked_by: UserId | None, deleted_at: datetime
    ) -> Invite | None:
        """Soft-delete an invite. Already deleted invites are left untouched.

        Args:
            invite_id: The invite to revoke
            revoked_by: Who revoked it (None for the sweeper)
            deleted_at: Time of revocation

        Returns:
            The invite as stored afterwards, None if it doesn't exist
        """
        pass

    @abstractmethod
    async def find_by_property(self, property_id: PropertyId) -> list[Invite]:
        """List all invites of a property, newest first.

        Args:
            property_id: The property

        Returns:
            List of invites, deleted ones included
        """
        pass

    @abstractmethod
    async def soft_delete_stale(self, cutoff: datetime, deleted_at: datetime) -> int:
        """Soft-delete invites that expired, or were used up, before cutoff.

        Args:
            cutoff: Invites expired before this time (or exhausted with
                accepted_at before it) are deleted
            deleted_at: Timestamp to record

        Returns:
            Number of invites soft-deleted
        """
        pass

    @abstractmethod
    async def purge_deleted(self, cutoff: datetime) -> int:
        """Hard-delete invites soft-deleted before cutoff.

        Args:
            cutoff: Deletion time threshold

        Returns:
            Number of invites purged
        """
        pass
