"""Invite validation domain service."""

import logfire

from tenantlink.domain.error import StoreUnavailableError
from tenantlink.domain.model import Invite, ValidationResult
from tenantlink.domain.repository import InviteRepository, PropertyRepository
from tenantlink.domain.value import InvalidReason, InviteToken, ValidationStatus
from tenantlink.util.logging import redact_token
from tenantlink.util.time import utcnow

from .base import Service
from .rate_limiter import RateLimiter
from .token_hasher import TokenHasher

GLOBAL_SCOPE = "global"


class InviteValidator(Service):
    """Read-only lookup of a candidate token for an unauthenticated redeemer.

    Every failure, whatever its cause, yields the same INVALID result. The
    cause is only logged.
    """

    def __init__(
        self,
        invite_repository: InviteRepository,
        property_repository: PropertyRepository,
        token_hasher: TokenHasher,
        rate_limiter: RateLimiter,
    ) -> None:
        """Initialize validator.

        Args:
            invite_repository: Invite repository
            property_repository: Property repository
            token_hasher: Keyed token hasher
            rate_limiter: Limiter applied per scope key
        """
        self.invite_repository = invite_repository
        self.property_repository = property_repository
        self.token_hasher = token_hasher
        self.rate_limiter = rate_limiter

    async def validate(
        self, candidate: str | None, scope: str | None = None
    ) -> ValidationResult:
        """Validate a candidate token.

        Args:
            candidate: Token as supplied by the redeemer
            scope: Rate-limit scope (typically the client IP); None shares
                the global bucket

        Returns:
            VALID with the property descriptor, INVALID, or THROTTLED with a
            retry hint
        """
        scope_key = scope or GLOBAL_SCOPE
        with logfire.span(
            "invite_validator.validate",
            scope=scope_key,
            token_preview=redact_token(candidate),
        ):
            decision = await self.rate_limiter.check(f"validate-invite:{scope_key}")
            if not decision.allowed:
                logfire.warn(
                    "Invite validation throttled",
                    scope=scope_key,
                    retry_after_seconds=decision.retry_after_seconds,
                )
                return ValidationResult(
                    status=ValidationStatus.THROTTLED,
                    retry_after_seconds=decision.retry_after_seconds,
                )

            token = InviteToken.from_candidate(candidate)
            if token is None:
                return self._invalid(InvalidReason.MALFORMED, candidate)

            invite = await self.invite_repository.find_by_token_hash(
                self.token_hasher.hash(token)
            )
            if invite is None:
                return self._invalid(InvalidReason.NOT_FOUND, candidate)

            await self._record_attempt(invite)

            reason = invite.invalid_reason(utcnow())
            if reason is not None:
                return self._invalid(reason, candidate, invite)

            summary = await self.property_repository.get_summary(invite.property_id)
            if summary is None:
                return self._invalid(InvalidReason.PROPERTY_MISSING, candidate, invite)

            logfire.info(
                "Invite validated",
                invite_id=str(invite.id),
                property_id=str(invite.property_id),
            )
            return ValidationResult(
                status=ValidationStatus.VALID,
                property=summary,
                intended_email=invite.intended_email,
                max_uses=invite.max_uses,
                use_count=invite.use_count,
            )

    async def _record_attempt(self, invite: Invite) -> None:
        """Bump validation counters; never fails the lookup."""
        try:
            updated = await self.invite_repository.record_validation_attempt(
                invite.id, utcnow()
            )
        except StoreUnavailableError as e:
            logfire.warn(
                "Could not record validation attempt",
                invite_id=str(invite.id),
                error=str(e),
            )
            return
        if not updated:
            logfire.debug("Invite row busy, attempt not recorded", invite_id=str(invite.id))

    @staticmethod
    def _invalid(
        reason: InvalidReason, candidate: str | None, invite: Invite | None = None
    ) -> ValidationResult:
        logfire.info(
            "Invite validation rejected",
            reason=reason.value,
            invite_id=str(invite.id) if invite else None,
            token_preview=redact_token(candidate),
        )
        return ValidationResult(status=ValidationStatus.INVALID, reason=reason)
