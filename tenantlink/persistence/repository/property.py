"""PostgreSQL implementation of Property repository."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from tenantlink.domain.model import Property, PropertySummary
from tenantlink.domain.repository import PropertyRepository
from tenantlink.domain.value import PropertyId, UserId
from tenantlink.persistence.mappers import (
    property_to_dict,
    row_to_property,
    row_to_property_summary,
)
from tenantlink.persistence.tables import profiles_table, properties_table


class PostgresPropertyRepository(PropertyRepository):
    """PostgreSQL implementation of PropertyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, property_id: PropertyId) -> Optional[Property]:
        """Find a property by ID."""
        stmt = select(properties_table).where(properties_table.c.id == property_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_property(dict(row)) if row else None

    async def get_summary(self, property_id: PropertyId) -> Optional[PropertySummary]:
        """Load a property with its owner's display name.

        Args:
            property_id: Property ID

        Returns:
            Property summary if the property exists
        """
        stmt = (
            select(
                properties_table.c.id,
                properties_table.c.name,
                properties_table.c.address,
                profiles_table.c.display_name.label("owner_display_name"),
            )
            .select_from(
                properties_table.outerjoin(
                    profiles_table, profiles_table.c.id == properties_table.c.owner_id
                )
            )
            .where(properties_table.c.id == property_id)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_property_summary(dict(row)) if row else None

    async def is_owned_by(self, property_id: PropertyId, user_id: UserId) -> bool:
        """Check property ownership."""
        stmt = select(properties_table.c.id).where(
            and_(
                properties_table.c.id == property_id,
                properties_table.c.owner_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def save(self, property: Property) -> Property:
        """Save a property (create or update)."""
        values = property_to_dict(property)
        stmt = insert(properties_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[properties_table.c.id],
            set_={k: v for k, v in values.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return property
