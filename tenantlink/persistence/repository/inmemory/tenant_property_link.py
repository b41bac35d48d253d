"""In-memory tenant-property link repository for testing."""

from typing import Optional

from tenantlink.domain.model import TenantPropertyLink
from tenantlink.domain.repository import TenantPropertyLinkRepository
from tenantlink.domain.value import InviteId, PropertyId, UserId

from .database import InMemorySession, yield_to_loop


class InMemoryTenantPropertyLinkRepository(TenantPropertyLinkRepository):
    """In-memory implementation of TenantPropertyLinkRepository for testing."""

    def __init__(self, session: InMemorySession) -> None:
        self.session = session
        self._links = session.database.links

    def _find(
        self, tenant_id: UserId, property_id: PropertyId
    ) -> Optional[TenantPropertyLink]:
        for link in self._links.values():
            if link.tenant_id == tenant_id and link.property_id == property_id:
                return link
        return None

    async def find(
        self, tenant_id: UserId, property_id: PropertyId
    ) -> Optional[TenantPropertyLink]:
        """Find the link between a tenant and a property."""
        await yield_to_loop()
        return self._find(tenant_id, property_id)

    async def create_if_absent(self, link: TenantPropertyLink) -> bool:
        """Insert a link unless the pair is already linked."""
        await yield_to_loop()
        if self._find(link.tenant_id, link.property_id) is not None:
            return False
        self.session.put(self._links, link.id, link)
        return True

    async def count_by_invite(self, invite_id: InviteId) -> int:
        """Count links created through one invite."""
        await yield_to_loop()
        return sum(1 for link in self._links.values() if link.invite_id == invite_id)
