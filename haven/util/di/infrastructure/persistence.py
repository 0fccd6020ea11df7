"""Persistence component providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from haven.config import Settings
from haven.domain.repository import ContactRepository, InviteRepository, UserRepository
from haven.persistence.database import (
    UnitOfWork,
    create_engine,
    create_session_factory,
)
from haven.persistence.repository import (
    PostgresContactRepository,
    PostgresInviteRepository,
    PostgresUserRepository,
)
from haven.util.di.base import ProviderBase
from haven.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Repositories and the database session behind them."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL repositories sharing one session per request."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def engine(self, settings: Settings) -> AsyncEngine:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        unit_of_work: UnitOfWork,
    ) -> AsyncIterator[AsyncSession]:
        """One transaction per request.

        Commits on success. Rolls back when the request raised or when an
        error response marked the unit of work.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                logfire.warn("Request transaction rolled back", error=str(e))
                raise
            if unit_of_work.rollback_only:
                await session.rollback()
                logfire.info("Request transaction rolled back after error response")
            else:
                await session.commit()

    @provide(scope=Scope.REQUEST)
    def users(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def contacts(self, session: AsyncSession) -> ContactRepository:
        return PostgresContactRepository(session)

    @provide(scope=Scope.REQUEST)
    def invites(self, session: AsyncSession) -> InviteRepository:
        return PostgresInviteRepository(session)
