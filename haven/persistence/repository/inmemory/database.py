"""Shared in-memory storage for the in-memory repositories."""

from dataclasses import dataclass, field

from haven.domain.model import Contact, Invite, User
from haven.domain.value import UserId


@dataclass
class InMemoryDatabase:
    """Tables the in-memory repositories read and write.

    One instance is shared by all repositories of a container, so writes
    made through one repository are visible through the others.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    contacts: list[Contact] = field(default_factory=list)
    invites: list[Invite] = field(default_factory=list)
    # (referrer_id, referred_id) pairs in insertion order
    referrals: list[tuple[UserId, UserId]] = field(default_factory=list)
