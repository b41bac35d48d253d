"""Outcome records returned by the invite engine."""

from datetime import datetime
from typing import Optional

from tenantlink.domain.model.common import DomainModel
from tenantlink.domain.model.property import PropertySummary
from tenantlink.domain.value import (
    AcceptStatus,
    InvalidReason,
    InviteId,
    InviteToken,
    ValidationStatus,
)


class ValidationResult(DomainModel):
    """Result of validating a candidate token.

    ``reason`` carries the internal cause of an INVALID result for logging.
    Interface layers must not expose it.
    """

    status: ValidationStatus
    property: Optional[PropertySummary] = None
    intended_email: Optional[str] = None
    max_uses: Optional[int] = None
    use_count: Optional[int] = None
    reason: Optional[InvalidReason] = None
    retry_after_seconds: Optional[int] = None


class AcceptResult(DomainModel):
    """Result of one accept call."""

    status: AcceptStatus
    property: Optional[PropertySummary] = None
    reason: Optional[InvalidReason] = None


class CreatedInvite(DomainModel):
    """Invite creation output.

    The only place the plaintext token ever leaves the engine.
    """

    invite_id: InviteId
    token: InviteToken
    expires_at: datetime


class CleanupResult(DomainModel):
    """Counts from one cleanup sweep."""

    soft_deleted: int = 0
    purged: int = 0
    rate_limit_entries_pruned: int = 0
    cleaned_at: datetime
