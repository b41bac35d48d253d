"""Invite acceptance domain service."""

from uuid import uuid4

import logfire

from tenantlink.domain.error import LockTimeoutError, StoreUnavailableError
from tenantlink.domain.model import AcceptResult, Invite, TenantPropertyLink
from tenantlink.domain.repository import (
    InviteRepository,
    ProfileRepository,
    PropertyRepository,
    TenantPropertyLinkRepository,
    UnitOfWork,
)
from tenantlink.domain.value import (
    AcceptStatus,
    InvalidReason,
    InviteId,
    InviteToken,
    LinkId,
    TokenHash,
    UserId,
    UserRole,
)
from tenantlink.util.logging import redact_token
from tenantlink.util.time import utcnow

from .base import Service
from .token_hasher import TokenHasher


class _UsesExhausted(Exception):
    """Raised inside the transaction to undo a link whose use was not granted."""

    def __init__(self, invite_id: InviteId):
        self.invite_id = invite_id
        super().__init__(f"Invite {invite_id} has no uses left")


class InviteAcceptor(Service):
    """Redeems an invite for an authenticated tenant in one transaction.

    Concurrent accepts of the same invite serialize on its row lock. Under
    that lock the link insert and the use increment either both commit or
    neither does, so an invite never links more than max_uses tenants and a
    tenant is never linked twice to the same property.
    """

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        invite_repository: InviteRepository,
        link_repository: TenantPropertyLinkRepository,
        property_repository: PropertyRepository,
        profile_repository: ProfileRepository,
        token_hasher: TokenHasher,
        lock_timeout_seconds: float,
    ) -> None:
        """Initialize acceptor.

        Args:
            unit_of_work: Transaction boundary
            invite_repository: Invite repository
            link_repository: Tenant-property link repository
            property_repository: Property repository
            profile_repository: Profile repository
            token_hasher: Keyed token hasher
            lock_timeout_seconds: Upper bound on waiting for the invite row lock
        """
        self.unit_of_work = unit_of_work
        self.invite_repository = invite_repository
        self.link_repository = link_repository
        self.property_repository = property_repository
        self.profile_repository = profile_repository
        self.token_hasher = token_hasher
        self.lock_timeout_seconds = lock_timeout_seconds

    async def accept(self, candidate: str | None, tenant_id: UserId) -> AcceptResult:
        """Accept an invite on behalf of a tenant.

        Args:
            candidate: Token as supplied by the redeemer
            tenant_id: Authenticated redeemer

        Returns:
            OK, ALREADY_LINKED, INVALID, CAPACITY_REACHED, or ERROR when the
            store was unavailable (nothing was written, safe to retry)
        """
        with logfire.span(
            "invite_acceptor.accept",
            tenant_id=str(tenant_id),
            token_preview=redact_token(candidate),
        ):
            token = InviteToken.from_candidate(candidate)
            if token is None:
                return self._invalid(InvalidReason.MALFORMED, tenant_id)

            token_hash = self.token_hasher.hash(token)
            try:
                async with self.unit_of_work.transaction():
                    return await self._accept_locked(token_hash, tenant_id)
            except _UsesExhausted as e:
                logfire.warn(
                    "Invite use not granted, link rolled back",
                    invite_id=str(e.invite_id),
                    tenant_id=str(tenant_id),
                )
                return AcceptResult(
                    status=AcceptStatus.CAPACITY_REACHED,
                    reason=InvalidReason.CAPACITY_REACHED,
                )
            except LockTimeoutError as e:
                logfire.warn(
                    "Invite lock not granted in time",
                    tenant_id=str(tenant_id),
                    timeout_seconds=self.lock_timeout_seconds,
                    error=str(e),
                )
                return AcceptResult(status=AcceptStatus.ERROR)
            except StoreUnavailableError as e:
                logfire.error(
                    "Invite store unavailable during accept",
                    tenant_id=str(tenant_id),
                    error=str(e),
                )
                return AcceptResult(status=AcceptStatus.ERROR)

    async def _accept_locked(
        self, token_hash: TokenHash, tenant_id: UserId
    ) -> AcceptResult:
        invite = await self.invite_repository.lock_by_token_hash(
            token_hash, self.lock_timeout_seconds
        )
        if invite is None:
            return self._invalid(InvalidReason.NOT_FOUND, tenant_id)

        now = utcnow()
        if invite.deleted_at is not None:
            return self._invalid(InvalidReason.REVOKED, tenant_id, invite)
        if invite.is_expired(now):
            return self._invalid(InvalidReason.EXPIRED, tenant_id, invite)

        listing = await self.property_repository.find_by_id(invite.property_id)
        summary = await self.property_repository.get_summary(invite.property_id)
        if listing is None or summary is None:
            return self._invalid(InvalidReason.PROPERTY_MISSING, tenant_id, invite)

        existing = await self.link_repository.find(tenant_id, invite.property_id)
        if existing is not None:
            await self.profile_repository.fill_role_if_empty(tenant_id, UserRole.TENANT)
            logfire.info(
                "Tenant already linked",
                invite_id=str(invite.id),
                tenant_id=str(tenant_id),
                link_id=str(existing.id),
            )
            return AcceptResult(status=AcceptStatus.ALREADY_LINKED, property=summary)

        if invite.is_exhausted():
            logfire.info(
                "Invite capacity reached",
                invite_id=str(invite.id),
                tenant_id=str(tenant_id),
                max_uses=invite.max_uses,
            )
            return AcceptResult(
                status=AcceptStatus.CAPACITY_REACHED,
                property=summary,
                reason=InvalidReason.CAPACITY_REACHED,
            )

        link = TenantPropertyLink(
            id=LinkId(uuid4()),
            tenant_id=tenant_id,
            property_id=invite.property_id,
            landlord_id=listing.owner_id,
            invite_id=invite.id,
            created_at=now,
        )
        if not await self.link_repository.create_if_absent(link):
            await self.profile_repository.fill_role_if_empty(tenant_id, UserRole.TENANT)
            logfire.info(
                "Tenant linked concurrently",
                invite_id=str(invite.id),
                tenant_id=str(tenant_id),
            )
            return AcceptResult(status=AcceptStatus.ALREADY_LINKED, property=summary)

        updated = await self.invite_repository.mark_accepted(invite.id, tenant_id, now)
        if updated is None:
            raise _UsesExhausted(invite.id)

        await self.profile_repository.fill_role_if_empty(tenant_id, UserRole.TENANT)

        logfire.info(
            "Invite accepted",
            invite_id=str(invite.id),
            tenant_id=str(tenant_id),
            property_id=str(invite.property_id),
            use_count=updated.use_count,
            max_uses=updated.max_uses,
        )
        return AcceptResult(status=AcceptStatus.OK, property=summary)

    @staticmethod
    def _invalid(
        reason: InvalidReason, tenant_id: UserId, invite: Invite | None = None
    ) -> AcceptResult:
        logfire.info(
            "Invite acceptance rejected",
            reason=reason.value,
            tenant_id=str(tenant_id),
            invite_id=str(invite.id) if invite else None,
        )
        return AcceptResult(status=AcceptStatus.INVALID, reason=reason)
