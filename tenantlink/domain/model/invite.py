"""Invite entity.

An invite grants one bounded right to link a tenant to a property. The
plaintext token is handed to the owner once at creation; only its keyed
hash is kept here.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from tenantlink.domain.model.common import DomainModel
from tenantlink.domain.value import (
    DeliveryMethod,
    InvalidReason,
    InviteId,
    InviteState,
    PropertyId,
    TokenHash,
    UserId,
)
from tenantlink.util.time import utcnow


class Invite(DomainModel):
    """Invite entity.

    Business rules:
    - Usable only while not deleted, not expired and not exhausted
    - accepted_at and accepted_by are set together on the first acceptance
    - use_count counts distinct tenants linked through this invite and never
      exceeds max_uses
    - intended_email is delivery metadata, never a credential
    """

    id: InviteId
    property_id: PropertyId
    created_by: UserId
    token_hash: TokenHash
    delivery_method: DeliveryMethod
    intended_email: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    accepted_by: Optional[UserId] = None
    deleted_at: Optional[datetime] = None
    revoked_by: Optional[UserId] = None
    max_uses: int = Field(default=1, ge=1)
    use_count: int = Field(default=0, ge=0)
    validation_attempts: int = Field(default=0, ge=0)
    last_validation_attempt: Optional[datetime] = None

    @model_validator(mode="after")
    def check_acceptance_invariants(self) -> "Invite":
        """Enforce paired acceptance fields and the use cap."""
        if (self.accepted_at is None) != (self.accepted_by is None):
            raise ValueError("accepted_at and accepted_by must be set together")
        if self.use_count > self.max_uses:
            raise ValueError("use_count cannot exceed max_uses")
        return self

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def is_exhausted(self) -> bool:
        return self.use_count >= self.max_uses

    def invalid_reason(self, now: datetime) -> InvalidReason | None:
        """Why this invite cannot be used right now, or None if it can.

        Revocation wins over expiry, expiry over exhaustion.
        """
        if self.deleted_at is not None:
            return InvalidReason.REVOKED
        if self.is_expired(now):
            return InvalidReason.EXPIRED
        if self.is_exhausted():
            return InvalidReason.CAPACITY_REACHED
        return None

    def is_usable(self, now: datetime) -> bool:
        return self.invalid_reason(now) is None

    def state(self, now: datetime) -> InviteState:
        """Derive the lifecycle state."""
        if self.deleted_at is not None:
            return InviteState.REVOKED
        if self.is_exhausted():
            # A single-use invite is simply "accepted" once used
            if self.max_uses == 1:
                return InviteState.ACCEPTED
            return InviteState.CAPACITY_REACHED
        if self.is_expired(now):
            return InviteState.EXPIRED
        return InviteState.ACTIVE
