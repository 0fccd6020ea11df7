"""Repository interfaces for Haven domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from haven.domain.repository.contact import ContactRepository
from haven.domain.repository.invite import InviteRepository
from haven.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "ContactRepository",
    "InviteRepository",
]
