"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import and_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantlink.domain.model import Profile
from tenantlink.domain.repository import ProfileRepository
from tenantlink.domain.value import UserId, UserRole
from tenantlink.persistence.mappers import profile_to_dict, row_to_profile
from tenantlink.persistence.repository.errors import store_error
from tenantlink.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        """Find a profile by user ID."""
        stmt = select(profiles_table).where(profiles_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def fill_role_if_empty(self, user_id: UserId, role: UserRole) -> bool:
        """Write the role only where none is recorded.

        Args:
            user_id: User ID
            role: Role to record

        Returns:
            True if a row was updated
        """
        stmt = (
            update(profiles_table)
            .where(
                and_(profiles_table.c.id == user_id, profiles_table.c.role.is_(None))
            )
            .values(role=role.value)
        )
        try:
            result = await self.session.execute(stmt)
        except (DBAPIError, OSError) as e:
            raise store_error(e, "fill_role_if_empty") from e
        return result.rowcount > 0

    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update)."""
        values = profile_to_dict(profile)
        stmt = insert(profiles_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[profiles_table.c.id],
            set_={k: v for k, v in values.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return profile
