"""Domain value objects for the invite engine.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
import string
from enum import Enum

from pydantic import field_validator

from tenantlink.domain.value.common import RootValueObject, ValueObject

TOKEN_LENGTH = 12
TOKEN_ALPHABET = string.ascii_letters + string.digits  # 62 symbols

_TOKEN_PATTERN = re.compile(rf"^[A-Za-z0-9]{{{TOKEN_LENGTH}}}$")
_HASH_PATTERN = re.compile(r"^[0-9a-f]{64}$")


class DeliveryMethod(str, Enum):
    """How the plaintext token reaches the redeemer."""

    EMAIL = "email"
    CODE = "code"


class InviteState(str, Enum):
    """Lifecycle state of an invite, derived from its fields and the clock."""

    ACTIVE = "active"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    REVOKED = "revoked"
    CAPACITY_REACHED = "capacity_reached"


class InvalidReason(str, Enum):
    """Internal cause behind an INVALID result.

    Logged server side only; never returned to a redeemer.
    """

    MALFORMED = "malformed"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    REVOKED = "revoked"
    CAPACITY_REACHED = "capacity_reached"
    PROPERTY_MISSING = "property_missing"


class ValidationStatus(str, Enum):
    """Outcome of a validation lookup."""

    VALID = "valid"
    INVALID = "invalid"
    THROTTLED = "throttled"


class AcceptStatus(str, Enum):
    """Terminal outcome of a single accept call."""

    OK = "ok"
    ALREADY_LINKED = "already_linked"
    INVALID = "invalid"
    CAPACITY_REACHED = "capacity_reached"
    ERROR = "error"


class UserRole(str, Enum):
    """Role recorded on a user's profile."""

    TENANT = "tenant"
    LANDLORD = "landlord"


class InviteToken(RootValueObject[str]):
    """Plaintext invite token: 12 base62 characters.

    Exists only in memory between generation and the create response, or
    between request parsing and hashing. ``repr`` never shows the value.
    """

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token length and alphabet."""
        if not _TOKEN_PATTERN.match(v):
            raise ValueError(
                f"Token must be {TOKEN_LENGTH} alphanumeric characters"
            )
        return v

    @classmethod
    def from_candidate(cls, candidate: str | None) -> "InviteToken | None":
        """Parse untrusted input, ignoring surrounding whitespace.

        Args:
            candidate: Raw value supplied by a redeemer

        Returns:
            The token, or None if the input is not a well-formed token
        """
        if not candidate:
            return None
        value = candidate.strip()
        if not _TOKEN_PATTERN.match(value):
            return None
        return cls(value)

    def __repr__(self) -> str:
        return f"InviteToken({self.root[:2]}…{self.root[-2:]})"


class TokenHash(RootValueObject[str]):
    """Hex-encoded HMAC-SHA256 digest of an invite token."""

    @field_validator("root")
    @classmethod
    def validate_hash_format(cls, v: str) -> str:
        """Validate digest is 64 lowercase hex characters."""
        if not _HASH_PATTERN.match(v):
            raise ValueError("Token hash must be 64 lowercase hex characters")
        return v


class RateLimitDecision(ValueObject):
    """Answer from a rate limiter for one attempt."""

    allowed: bool
    retry_after_seconds: int | None = None
