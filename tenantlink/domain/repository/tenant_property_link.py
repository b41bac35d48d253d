"""Tenant-property link repository interface."""

from abc import ABC, abstractmethod

from tenantlink.domain.model.tenant_property_link import TenantPropertyLink
from tenantlink.domain.value import InviteId, PropertyId, UserId


class TenantPropertyLinkRepository(ABC):
    """Repository for TenantPropertyLink entity."""

    @abstractmethod
    async def find(
        self, tenant_id: UserId, property_id: PropertyId
    ) -> TenantPropertyLink | None:
        """Find the link between a tenant and a property.

        Args:
            tenant_id: The tenant
            property_id: The property

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_if_absent(self, link: TenantPropertyLink) -> bool:
        """Insert a link unless (tenant_id, property_id) already exists.

        A unique violation is absorbed so the enclosing transaction stays
        usable.

        Args:
            link: The link to insert

        Returns:
            True if inserted, False if the pair was already linked
        """
        pass

    @abstractmethod
    async def count_by_invite(self, invite_id: InviteId) -> int:
        """Count links created through one invite.

        Args:
            invite_id: The invite

        Returns:
            Number of links
        """
        pass
