"""Domain model entities for Haven."""

from haven.domain.model.contact import Contact, ContactPatch
from haven.domain.model.invite import Invite
from haven.domain.model.user import User

__all__ = [
    "User",
    "Contact",
    "ContactPatch",
    "Invite",
]
