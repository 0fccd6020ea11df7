"""In-memory repository implementations for testing."""

from .contact import InMemoryContactRepository
from .database import InMemoryDatabase
from .invite import InMemoryInviteRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryContactRepository",
    "InMemoryDatabase",
    "InMemoryInviteRepository",
    "InMemoryUserRepository",
]
