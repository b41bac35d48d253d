"""Domain model entities for the invite engine."""

from tenantlink.domain.model.invite import Invite
from tenantlink.domain.model.profile import Profile
from tenantlink.domain.model.property import Property, PropertySummary
from tenantlink.domain.model.results import (
    AcceptResult,
    CleanupResult,
    CreatedInvite,
    ValidationResult,
)
from tenantlink.domain.model.tenant_property_link import TenantPropertyLink

__all__ = [
    "AcceptResult",
    "CleanupResult",
    "CreatedInvite",
    "Invite",
    "Profile",
    "Property",
    "PropertySummary",
    "TenantPropertyLink",
    "ValidationResult",
]
