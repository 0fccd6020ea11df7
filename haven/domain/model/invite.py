"""Invite entity.

Personal invites are single-use, email-bound tokens created by an existing
user for one specific recipient.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from haven.domain.model.common import DomainModel
from haven.domain.model.user import utcnow
from haven.domain.value import InviteId, InviteStatus, InviteToken, UserId


class Invite(DomainModel):
    """Personal invite issued by a user.

    Business rules:
    - invite_token is globally unique
    - One unredeemed personal invite per (inviter, email)
    - status only moves forward: sent -> clicked -> signed_up
    - clicked_at and redeemed_at are set at most once
    """

    id: InviteId
    inviter_id: UserId
    email: str
    invite_token: InviteToken
    is_personal: bool = True
    status: InviteStatus = InviteStatus.SENT
    sent_at: datetime = Field(default_factory=utcnow)
    clicked_at: Optional[datetime] = None
    redeemed_at: Optional[datetime] = None
    invited_user_id: Optional[UserId] = None
    claimed_email: Optional[str] = None
    claimed_wallet_address: Optional[str] = None
    recipient_name: Optional[str] = None
    message: Optional[str] = None

    @property
    def is_redeemed(self) -> bool:
        return self.status == InviteStatus.SIGNED_UP
