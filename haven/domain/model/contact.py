"""Contact entity.

A contact is a directory entry in one user's list describing a counterparty
and the owner's relationship with them.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from haven.domain.model.common import DomainModel
from haven.domain.model.user import utcnow
from haven.domain.value import ContactId, ContactStatus, UserId


class Contact(DomainModel):
    """Contact entry owned by a user.

    Business rules:
    - At most one entry per email (case-insensitive) or wallet per owner
    - status never regresses (external < invited < active)
    """

    id: ContactId
    owner_id: UserId
    name: Optional[str] = None
    email: Optional[str] = None
    wallet_address: Optional[str] = None
    haven_user_id: Optional[UserId] = None
    status: ContactStatus = ContactStatus.EXTERNAL
    invited_at: Optional[datetime] = None
    joined_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)

    def matches(self, email: str | None, wallet_address: str | None) -> bool:
        """Check whether this entry matches an email or wallet key."""
        if email and self.email and self.email.lower() == email.lower():
            return True
        if wallet_address and self.wallet_address == wallet_address:
            return True
        return False


class ContactPatch(DomainModel):
    """Partial contact update merged into an existing entry.

    None fields leave the stored value untouched.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    wallet_address: Optional[str] = None
    haven_user_id: Optional[UserId] = None
    status: Optional[ContactStatus] = None
    invited_at: Optional[datetime] = None
    joined_at: Optional[datetime] = None
