"""Mock persistence providers for testing."""

from dishka import Scope, provide

from haven.domain.repository import (
    ContactRepository,
    InviteRepository,
    UserRepository,
)
from haven.persistence.repository.inmemory import (
    InMemoryContactRepository,
    InMemoryDatabase,
    InMemoryInviteRepository,
    InMemoryUserRepository,
)
from haven.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The in-memory database lives for the whole container so that data
    written in one HTTP request is visible in the next. Each test builds
    its own container, so tests stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        """Provide the shared in-memory database."""
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, db: InMemoryDatabase) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_contact_repository(self, db: InMemoryDatabase) -> ContactRepository:
        """Provide in-memory contact repository."""
        return InMemoryContactRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_invite_repository(self, db: InMemoryDatabase) -> InviteRepository:
        """Provide in-memory invite repository."""
        return InMemoryInviteRepository(db)
