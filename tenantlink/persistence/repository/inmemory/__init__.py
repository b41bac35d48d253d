"""In-memory repository implementations for testing."""

from .database import InMemoryDatabase, InMemorySession
from .invite import InMemoryInviteRepository
from .profile import InMemoryProfileRepository
from .property import InMemoryPropertyRepository
from .tenant_property_link import InMemoryTenantPropertyLinkRepository
from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryDatabase",
    "InMemoryInviteRepository",
    "InMemoryProfileRepository",
    "InMemoryPropertyRepository",
    "InMemorySession",
    "InMemoryTenantPropertyLinkRepository",
    "InMemoryUnitOfWork",
]
