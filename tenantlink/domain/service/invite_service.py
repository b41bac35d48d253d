"""Invite domain service."""

import re
from datetime import timedelta
from uuid import uuid4

import logfire

from tenantlink.config import InviteSettings
from tenantlink.domain.error import (
    DuplicateTokenHashError,
    NotAuthorizedError,
    NotFoundError,
    TokenGenerationError,
    ValidationError,
)
from tenantlink.domain.model import (
    AcceptResult,
    CleanupResult,
    CreatedInvite,
    Invite,
    ValidationResult,
)
from tenantlink.domain.repository import InviteRepository, PropertyRepository
from tenantlink.domain.value import (
    DeliveryMethod,
    InviteId,
    PropertyId,
    UserId,
)
from tenantlink.util.time import utcnow

from .base import Service
from .invite_acceptor import InviteAcceptor
from .invite_validator import InviteValidator
from .rate_limiter import RateLimiter
from .token_generator import TokenGenerator
from .token_hasher import TokenHasher

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class InviteService(Service):
    """Domain service composing the invite lifecycle.

    Owners create, list and revoke invites; redeemers validate and accept
    them; a scheduler sweeps stale ones.
    """

    def __init__(
        self,
        invite_repository: InviteRepository,
        property_repository: PropertyRepository,
        token_generator: TokenGenerator,
        token_hasher: TokenHasher,
        validator: InviteValidator,
        acceptor: InviteAcceptor,
        rate_limiter: RateLimiter,
        settings: InviteSettings,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            property_repository: Property repository
            token_generator: Token source
            token_hasher: Keyed token hasher
            validator: Validation service
            acceptor: Acceptance service
            rate_limiter: Limiter whose stale entries the sweep prunes
            settings: Invite settings
        """
        self.invite_repository = invite_repository
        self.property_repository = property_repository
        self.token_generator = token_generator
        self.token_hasher = token_hasher
        self.validator = validator
        self.acceptor = acceptor
        self.rate_limiter = rate_limiter
        self.settings = settings

    async def create_invite(
        self,
        owner_id: UserId,
        property_id: PropertyId,
        delivery_method: DeliveryMethod,
        intended_email: str | None = None,
        max_uses: int | None = None,
    ) -> CreatedInvite:
        """Create an invite for a property.

        Args:
            owner_id: Authenticated caller, must own the property
            property_id: Property to grant access to
            delivery_method: How the token will be delivered
            intended_email: Recipient address, required for email delivery
            max_uses: Number of distinct tenants that may redeem the token

        Returns:
            Invite id, plaintext token (returned only here) and expiry

        Raises:
            NotAuthorizedError: If the caller does not own the property
            ValidationError: If max_uses or the email is invalid
            TokenGenerationError: If no unique token could be stored
        """
        with logfire.span(
            "invite_service.create_invite",
            owner_id=str(owner_id),
            property_id=str(property_id),
            delivery_method=delivery_method.value,
        ):
            if not await self.property_repository.is_owned_by(property_id, owner_id):
                logfire.warn(
                    "Invite creation by non-owner",
                    owner_id=str(owner_id),
                    property_id=str(property_id),
                )
                raise NotAuthorizedError("property", str(property_id), str(owner_id))

            uses = self._check_max_uses(max_uses)
            email = self._normalize_email(intended_email)
            if delivery_method == DeliveryMethod.EMAIL and email is None:
                raise ValidationError("Email delivery requires an intended email")

            for attempt in range(1, self.settings.token_collision_retries + 1):
                token = self.token_generator.generate()
                now = utcnow()
                invite = Invite(
                    id=InviteId(uuid4()),
                    property_id=property_id,
                    created_by=owner_id,
                    token_hash=self.token_hasher.hash(token),
                    delivery_method=delivery_method,
                    intended_email=email,
                    created_at=now,
                    expires_at=now + timedelta(hours=self.settings.ttl_hours),
                    max_uses=uses,
                )
                try:
                    saved = await self.invite_repository.create(invite)
                except DuplicateTokenHashError:
                    logfire.warn("Invite token collision", attempt=attempt)
                    continue

                logfire.info(
                    "Invite created",
                    invite_id=str(saved.id),
                    property_id=str(property_id),
                    max_uses=uses,
                    expires_at=saved.expires_at.isoformat(),
                )
                return CreatedInvite(
                    invite_id=saved.id, token=token, expires_at=saved.expires_at
                )

            logfire.error(
                "Invite token generation exhausted",
                property_id=str(property_id),
                attempts=self.settings.token_collision_retries,
            )
            raise TokenGenerationError(
                f"No unique token after {self.settings.token_collision_retries} attempts"
            )

    async def validate_invite(
        self, candidate: str | None, scope: str | None = None
    ) -> ValidationResult:
        """Validate a candidate token.

        Args:
            candidate: Token as supplied by the redeemer
            scope: Rate-limit scope key

        Returns:
            Validation result
        """
        return await self.validator.validate(candidate, scope)

    async def accept_invite(
        self, candidate: str | None, tenant_id: UserId
    ) -> AcceptResult:
        """Accept an invite for an authenticated tenant.

        Args:
            candidate: Token as supplied by the redeemer
            tenant_id: Authenticated redeemer

        Returns:
            Accept result with the internal status
        """
        return await self.acceptor.accept(candidate, tenant_id)

    async def revoke_invite(self, invite_id: InviteId, user_id: UserId) -> Invite:
        """Soft-delete an invite. Revoking twice is a no-op.

        Args:
            invite_id: Invite to revoke
            user_id: Caller, must be the creator or the property owner

        Returns:
            The revoked invite

        Raises:
            NotFoundError: If the invite doesn't exist
            NotAuthorizedError: If the caller may not manage the invite
        """
        with logfire.span(
            "invite_service.revoke_invite",
            invite_id=str(invite_id),
            user_id=str(user_id),
        ):
            invite = await self.invite_repository.find_by_id(invite_id)
            if invite is None:
                raise NotFoundError("Invite", str(invite_id))

            if invite.created_by != user_id and not (
                await self.property_repository.is_owned_by(invite.property_id, user_id)
            ):
                logfire.warn(
                    "Invite revocation by non-owner",
                    invite_id=str(invite_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError("invite", str(invite_id), str(user_id))

            if invite.deleted_at is not None:
                logfire.info("Invite already revoked", invite_id=str(invite_id))
                return invite

            revoked = await self.invite_repository.soft_delete(
                invite_id, user_id, utcnow()
            )
            if revoked is None:
                raise NotFoundError("Invite", str(invite_id))

            logfire.info("Invite revoked", invite_id=str(invite_id))
            return revoked

    async def list_property_invites(
        self, property_id: PropertyId, user_id: UserId
    ) -> list[Invite]:
        """List a property's invites for its owner.

        Args:
            property_id: The property
            user_id: Caller, must own the property

        Returns:
            Invites, newest first

        Raises:
            NotAuthorizedError: If the caller does not own the property
        """
        with logfire.span(
            "invite_service.list_property_invites",
            property_id=str(property_id),
            user_id=str(user_id),
        ):
            if not await self.property_repository.is_owned_by(property_id, user_id):
                raise NotAuthorizedError("property", str(property_id), str(user_id))
            return await self.invite_repository.find_by_property(property_id)

    async def cleanup_expired_invites(self) -> CleanupResult:
        """Sweep stale invites and rate-limit counters.

        Safe to run concurrently and repeatedly: each step is one set-based
        statement over rows that still qualify.

        Returns:
            Counts of affected rows
        """
        with logfire.span("invite_service.cleanup_expired_invites"):
            now = utcnow()
            soft_deleted = await self.invite_repository.soft_delete_stale(
                now - timedelta(days=self.settings.retention_days), now
            )
            purged = await self.invite_repository.purge_deleted(
                now - timedelta(days=self.settings.purge_after_days)
            )
            pruned = await self.rate_limiter.purge_stale()

            logfire.info(
                "Invite cleanup finished",
                soft_deleted=soft_deleted,
                purged=purged,
                rate_limit_entries_pruned=pruned,
            )
            return CleanupResult(
                soft_deleted=soft_deleted,
                purged=purged,
                rate_limit_entries_pruned=pruned,
                cleaned_at=now,
            )

    def _check_max_uses(self, max_uses: int | None) -> int:
        uses = self.settings.default_max_uses if max_uses is None else max_uses
        if not 1 <= uses <= self.settings.max_uses_limit:
            raise ValidationError(
                f"max_uses must be between 1 and {self.settings.max_uses_limit}"
            )
        return uses

    @staticmethod
    def _normalize_email(email: str | None) -> str | None:
        if email is None:
            return None
        normalized = email.strip().lower()
        if not normalized:
            return None
        if not _EMAIL_PATTERN.match(normalized):
            raise ValidationError("Intended email is not a valid address")
        return normalized
