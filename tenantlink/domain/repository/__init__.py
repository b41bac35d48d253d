"""Repository interfaces for the invite engine.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from tenantlink.domain.repository.invite import InviteRepository
from tenantlink.domain.repository.profile import ProfileRepository
from tenantlink.domain.repository.property import PropertyRepository
from tenantlink.domain.repository.tenant_property_link import (
    TenantPropertyLinkRepository,
)
from tenantlink.domain.repository.unit_of_work import UnitOfWork

__all__ = [
    "InviteRepository",
    "ProfileRepository",
    "PropertyRepository",
    "TenantPropertyLinkRepository",
    "UnitOfWork",
]
