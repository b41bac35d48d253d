"""PostgreSQL repository implementations."""

from tenantlink.persistence.repository.invite import PostgresInviteRepository
from tenantlink.persistence.repository.profile import PostgresProfileRepository
from tenantlink.persistence.repository.property import PostgresPropertyRepository
from tenantlink.persistence.repository.tenant_property_link import (
    PostgresTenantPropertyLinkRepository,
)
from tenantlink.persistence.repository.unit_of_work import PostgresUnitOfWork

__all__ = [
    "PostgresInviteRepository",
    "PostgresProfileRepository",
    "PostgresPropertyRepository",
    "PostgresTenantPropertyLinkRepository",
    "PostgresUnitOfWork",
]
