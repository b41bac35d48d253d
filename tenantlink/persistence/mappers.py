"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from tenantlink.domain.model import (
    Invite,
    Profile,
    Property,
    PropertySummary,
    TenantPropertyLink,
)
from tenantlink.domain.value import (
    DeliveryMethod,
    InviteId,
    LinkId,
    PropertyId,
    TokenHash,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_user_id(value: Any) -> Optional[UserId]:
    return UserId(_uuid(value)) if value else None


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model
    """
    return Invite(
        id=InviteId(_uuid(row["id"])),
        property_id=PropertyId(_uuid(row["property_id"])),
        created_by=UserId(_uuid(row["created_by"])),
        token_hash=TokenHash(row["token_hash"]),
        delivery_method=DeliveryMethod(row["delivery_method"]),
        intended_email=row.get("intended_email"),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        accepted_at=row.get("accepted_at"),
        accepted_by=_optional_user_id(row.get("accepted_by")),
        deleted_at=row.get("deleted_at"),
        revoked_by=_optional_user_id(row.get("revoked_by")),
        max_uses=row["max_uses"],
        use_count=row["use_count"],
        validation_attempts=row.get("validation_attempts", 0),
        last_validation_attempt=row.get("last_validation_attempt"),
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    Args:
        invite: Invite domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": invite.id,
        "property_id": invite.property_id,
        "created_by": invite.created_by,
        "token_hash": invite.token_hash.root,
        "delivery_method": invite.delivery_method.value,
        "intended_email": invite.intended_email,
        "created_at": invite.created_at,
        "expires_at": invite.expires_at,
        "accepted_at": invite.accepted_at,
        "accepted_by": invite.accepted_by,
        "deleted_at": invite.deleted_at,
        "revoked_by": invite.revoked_by,
        "max_uses": invite.max_uses,
        "use_count": invite.use_count,
        "validation_attempts": invite.validation_attempts,
        "last_validation_attempt": invite.last_validation_attempt,
    }


def row_to_link(row: Dict[str, Any]) -> TenantPropertyLink:
    """Convert database row to TenantPropertyLink domain model."""
    return TenantPropertyLink(
        id=LinkId(_uuid(row["id"])),
        tenant_id=UserId(_uuid(row["tenant_id"])),
        property_id=PropertyId(_uuid(row["property_id"])),
        landlord_id=UserId(_uuid(row["landlord_id"])),
        invite_id=InviteId(_uuid(row["invite_id"])) if row.get("invite_id") else None,
        is_active=row["is_active"],
        created_at=row["created_at"],
    )


def link_to_dict(link: TenantPropertyLink) -> Dict[str, Any]:
    """Convert TenantPropertyLink domain model to database dict."""
    return link.model_dump()


def row_to_property(row: Dict[str, Any]) -> Property:
    """Convert database row to Property domain model."""
    return Property(
        id=PropertyId(_uuid(row["id"])),
        owner_id=UserId(_uuid(row["owner_id"])),
        name=row["name"],
        address=row.get("address"),
    )


def row_to_property_summary(row: Dict[str, Any]) -> PropertySummary:
    """Convert a property row joined with its owner's profile.

    Args:
        row: Row with property columns and ``owner_display_name``

    Returns:
        Redeemer-facing property summary
    """
    return PropertySummary(
        id=PropertyId(_uuid(row["id"])),
        name=row["name"],
        address=row.get("address"),
        owner_display_name=row.get("owner_display_name"),
    )


def property_to_dict(property: Property) -> Dict[str, Any]:
    """Convert Property domain model to database dict."""
    return property.model_dump()


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    return Profile(
        id=UserId(_uuid(row["id"])),
        display_name=row.get("display_name"),
        role=UserRole(row["role"]) if row.get("role") else None,
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict."""
    return {
        "id": profile.id,
        "display_name": profile.display_name,
        "role": profile.role.value if profile.role else None,
    }
