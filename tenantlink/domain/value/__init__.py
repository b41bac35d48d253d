"""Domain value objects for the invite engine."""

from tenantlink.domain.value.identifiers import (
    InviteId,
    LinkId,
    PropertyId,
    UserId,
)
from tenantlink.domain.value.types import (
    TOKEN_ALPHABET,
    TOKEN_LENGTH,
    AcceptStatus,
    DeliveryMethod,
    InvalidReason,
    InviteState,
    InviteToken,
    RateLimitDecision,
    TokenHash,
    UserRole,
    ValidationStatus,
)

__all__ = [
    # Identifiers
    "InviteId",
    "LinkId",
    "PropertyId",
    "UserId",
    # Types
    "TOKEN_ALPHABET",
    "TOKEN_LENGTH",
    "AcceptStatus",
    "DeliveryMethod",
    "InvalidReason",
    "InviteState",
    "InviteToken",
    "RateLimitDecision",
    "TokenHash",
    "UserRole",
    "ValidationStatus",
]
