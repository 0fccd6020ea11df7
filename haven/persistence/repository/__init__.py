"""PostgreSQL repository implementations."""

from haven.persistence.repository.contact import PostgresContactRepository
from haven.persistence.repository.invite import PostgresInviteRepository
from haven.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresContactRepository",
    "PostgresInviteRepository",
]
