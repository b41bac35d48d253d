"""PostgreSQL implementation of TenantPropertyLink repository."""

from typing import Optional

from sqlalchemy import and_, func, insert, select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantlink.domain.model import TenantPropertyLink
from tenantlink.domain.repository import TenantPropertyLinkRepository
from tenantlink.domain.value import InviteId, PropertyId, UserId
from tenantlink.persistence.mappers import link_to_dict, row_to_link
from tenantlink.persistence.repository.errors import store_error
from tenantlink.persistence.tables import tenant_property_links_table

TENANT_PROPERTY_CONSTRAINT = "uq_tenant_property"


class PostgresTenantPropertyLinkRepository(TenantPropertyLinkRepository):
    """PostgreSQL implementation of TenantPropertyLinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(
        self, tenant_id: UserId, property_id: PropertyId
    ) -> Optional[TenantPropertyLink]:
        """Find the link between a tenant and a property."""
        stmt = select(tenant_property_links_table).where(
            and_(
                tenant_property_links_table.c.tenant_id == tenant_id,
                tenant_property_links_table.c.property_id == property_id,
            )
        )
        try:
            result = await self.session.execute(stmt)
        except (DBAPIError, OSError) as e:
            raise store_error(e, "find_link") from e
        row = result.mappings().first()
        return row_to_link(dict(row)) if row else None

    async def create_if_absent(self, link: TenantPropertyLink) -> bool:
        """Insert a link inside a savepoint.

        Args:
            link: Link to insert

        Returns:
            True if inserted, False on a (tenant_id, property_id) conflict
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(tenant_property_links_table).values(**link_to_dict(link))
                )
        except IntegrityError as e:
            if TENANT_PROPERTY_CONSTRAINT in str(e.orig):
                return False
            raise
        except (DBAPIError, OSError) as e:
            raise store_error(e, "create_link") from e
        return True

    async def count_by_invite(self, invite_id: InviteId) -> int:
        """Count links created through one invite."""
        stmt = (
            select(func.count())
            .select_from(tenant_property_links_table)
            .where(tenant_property_links_table.c.invite_id == invite_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
