"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, func, insert, or_, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantlink.domain.error import DuplicateTokenHashError
from tenantlink.domain.model import Invite
from tenantlink.domain.repository import InviteRepository
from tenantlink.domain.value import InviteId, PropertyId, TokenHash, UserId
from tenantlink.persistence.mappers import invite_to_dict, row_to_invite
from tenantlink.persistence.repository.errors import store_error
from tenantlink.persistence.tables import invites_table

ACTIVE_TOKEN_HASH_INDEX = "idx_invites_token_hash_active"


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _by_hash(self, token_hash: TokenHash):
        # Live invite first, then the most recently deleted one
        return (
            select(invites_table)
            .where(invites_table.c.token_hash == token_hash.root)
            .order_by(invites_table.c.deleted_at.desc().nulls_first())
            .limit(1)
        )

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID.

        Args:
            invite_id: Invite ID to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(invites_table).where(invites_table.c.id == invite_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_token_hash(self, token_hash: TokenHash) -> Optional[Invite]:
        """Find an invite by token hash.

        Args:
            token_hash: Keyed hash of the candidate token

        Returns:
            Invite if found, None otherwise
        """
        result = await self.session.execute(self._by_hash(token_hash))
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def lock_by_token_hash(
        self, token_hash: TokenHash, timeout_seconds: float
    ) -> Optional[Invite]:
        """Select the invite FOR UPDATE with a transaction-local lock_timeout.

        Args:
            token_hash: Keyed hash of the candidate token
            timeout_seconds: Maximum time to wait for the row lock

        Returns:
            Locked invite if found, None otherwise
        """
        timeout_ms = max(1, int(timeout_seconds * 1000))
        try:
            await self.session.execute(
                select(func.set_config("lock_timeout", f"{timeout_ms}ms", True))
            )
            result = await self.session.execute(
                self._by_hash(token_hash).with_for_update()
            )
        except (DBAPIError, OSError) as e:
            raise store_error(e, "lock_by_token_hash") from e
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def create(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Runs in a savepoint so a hash collision leaves the session usable for
        the next attempt.

        Args:
            invite: Invite to insert

        Returns:
            Inserted invite
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(invites_table).values(**invite_to_dict(invite))
                )
        except IntegrityError as e:
            if ACTIVE_TOKEN_HASH_INDEX in str(e.orig):
                raise DuplicateTokenHashError("Token hash already in use") from e
            raise
        return invite

    async def record_validation_attempt(
        self, invite_id: InviteId, attempted_at: datetime
    ) -> bool:
        """Bump validation counters, skipping the row if it is locked.

        Args:
            invite_id: Invite that was looked up
            attempted_at: Time of the attempt

        Returns:
            True if the row was updated
        """
        unlocked = (
            select(invites_table.c.id)
            .where(invites_table.c.id == invite_id)
            .with_for_update(skip_locked=True)
        )
        stmt = (
            update(invites_table)
            .where(invites_table.c.id.in_(unlocked))
            .values(
                validation_attempts=invites_table.c.validation_attempts + 1,
                last_validation_attempt=attempted_at,
            )
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
        except (DBAPIError, OSError) as e:
            raise store_error(e, "record_validation_attempt") from e
        return result.rowcount > 0

    async def mark_accepted(
        self, invite_id: InviteId, tenant_id: UserId, accepted_at: datetime
    ) -> Optional[Invite]:
        """Consume one use with a conditional increment.

        Args:
            invite_id: Locked invite
            tenant_id: Redeeming tenant
            accepted_at: Time of acceptance

        Returns:
            Updated invite, None if use_count already reached max_uses
        """
        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.id == invite_id,
                    invites_table.c.deleted_at.is_(None),
                    invites_table.c.use_count < invites_table.c.max_uses,
                )
            )
            .values(
                use_count=invites_table.c.use_count + 1,
                accepted_at=func.coalesce(invites_table.c.accepted_at, accepted_at),
                accepted_by=func.coalesce(invites_table.c.accepted_by, tenant_id),
            )
            .returning(*invites_table.c)
        )
        try:
            result = await self.session.execute(stmt)
        except (DBAPIError, OSError) as e:
            raise store_error(e, "mark_accepted") from e
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def soft_delete(
        self, invite_id: InviteId, revoked_by: Optional[UserId], deleted_at: datetime
    ) -> Optional[Invite]:
        """Soft-delete an invite unless it already is.

        Args:
            invite_id: Invite to revoke
            revoked_by: Revoking user
            deleted_at: Time of revocation

        Returns:
            Invite as stored afterwards, None if it doesn't exist
        """
        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.id == invite_id,
                    invites_table.c.deleted_at.is_(None),
                )
            )
            .values(deleted_at=deleted_at, revoked_by=revoked_by)
        )
        await self.session.execute(stmt)
        return await self.find_by_id(invite_id)

    async def find_by_property(self, property_id: PropertyId) -> list[Invite]:
        """List a property's invites, newest first.

        Args:
            property_id: Property ID

        Returns:
            List of invites
        """
        stmt = (
            select(invites_table)
            .where(invites_table.c.property_id == property_id)
            .order_by(invites_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_invite(dict(row)) for row in result.mappings().all()]

    async def soft_delete_stale(self, cutoff: datetime, deleted_at: datetime) -> int:
        """Soft-delete invites expired, or used up, before cutoff.

        Args:
            cutoff: Retention threshold
            deleted_at: Timestamp to record

        Returns:
            Number of rows soft-deleted
        """
        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.deleted_at.is_(None),
                    or_(
                        invites_table.c.expires_at < cutoff,
                        and_(
                            invites_table.c.use_count >= invites_table.c.max_uses,
                            invites_table.c.accepted_at < cutoff,
                        ),
                    ),
                )
            )
            .values(deleted_at=deleted_at)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def purge_deleted(self, cutoff: datetime) -> int:
        """Hard-delete invites soft-deleted before cutoff.

        Args:
            cutoff: Deletion time threshold

        Returns:
            Number of rows purged
        """
        stmt = delete(invites_table).where(invites_table.c.deleted_at < cutoff)
        result = await self.session.execute(stmt)
        return result.rowcount
