"""Response models shared by several use cases."""

from datetime import datetime

from pydantic import BaseModel

from haven.domain.model import Contact, Invite, User
from haven.domain.value import ContactStatus, InviteStatus


class InviterInfo(BaseModel):
    """Public identity of the user who referred or invited the caller."""

    id: str
    email: str | None
    full_name: str | None
    referral_code: str

    @classmethod
    def from_user(cls, user: User) -> "InviterInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            full_name=user.full_name,
            referral_code=user.referral_code.root,
        )


class InviteInfo(BaseModel):
    """Personal invite state."""

    email: str
    invite_token: str
    status: InviteStatus
    sent_at: datetime
    clicked_at: datetime | None = None
    redeemed_at: datetime | None = None
    recipient_name: str | None = None

    @classmethod
    def from_invite(cls, invite: Invite) -> "InviteInfo":
        return cls(
            email=invite.email,
            invite_token=invite.invite_token.root,
            status=invite.status,
            sent_at=invite.sent_at,
            clicked_at=invite.clicked_at,
            redeemed_at=invite.redeemed_at,
            recipient_name=invite.recipient_name,
        )


class ContactInfo(BaseModel):
    """Contact entry as returned to its owner."""

    name: str | None = None
    email: str | None = None
    wallet_address: str | None = None
    haven_user_id: str | None = None
    status: ContactStatus
    invited_at: datetime | None = None
    joined_at: datetime | None = None

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactInfo":
        return cls(
            name=contact.name,
            email=contact.email,
            wallet_address=contact.wallet_address,
            haven_user_id=str(contact.haven_user_id) if contact.haven_user_id else None,
            status=contact.status,
            invited_at=contact.invited_at,
            joined_at=contact.joined_at,
        )


class ContactListResponse(BaseModel):
    """A user's contacts in insertion order."""

    contacts: list[ContactInfo]
