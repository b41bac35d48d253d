"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tenantlink.config import Settings
from tenantlink.domain.repository import (
    InviteRepository,
    ProfileRepository,
    PropertyRepository,
    TenantPropertyLinkRepository,
    UnitOfWork,
)
from tenantlink.persistence.database import create_engine, create_session_factory
from tenantlink.persistence.repository import (
    PostgresInviteRepository,
    PostgresProfileRepository,
    PostgresPropertyRepository,
    PostgresTenantPropertyLinkRepository,
    PostgresUnitOfWork,
)
from tenantlink.util.di.base import ProviderBase
from tenantlink.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised. Row locks taken during
        the request are released here.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide unit of work on the request session."""
        return PostgresUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_invite_repository(self, session: AsyncSession) -> InviteRepository:
        """Provide Invite repository."""
        return PostgresInviteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_link_repository(
        self, session: AsyncSession
    ) -> TenantPropertyLinkRepository:
        """Provide TenantPropertyLink repository."""
        return PostgresTenantPropertyLinkRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_property_repository(self, session: AsyncSession) -> PropertyRepository:
        """Provide Property repository."""
        return PostgresPropertyRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, session: AsyncSession) -> ProfileRepository:
        """Provide Profile repository."""
        return PostgresProfileRepository(session)
