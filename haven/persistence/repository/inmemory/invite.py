"""In-memory invite repository for testing."""

from datetime import datetime
from typing import Optional

from haven.domain.error import DuplicateRecordError
from haven.domain.model.invite import Invite
from haven.domain.repository.invite import InviteRepository
from haven.domain.value import InviteId, InviteStatus, InviteToken, UserId

from .database import InMemoryDatabase


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing."""

    def __init__(self, db: InMemoryDatabase | None = None) -> None:
        self._db = db or InMemoryDatabase()

    def _replace(self, invite: Invite) -> None:
        for i, existing in enumerate(self._db.invites):
            if existing.id == invite.id:
                self._db.invites[i] = invite
                return

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        for invite in self._db.invites:
            if invite.id == invite_id:
                return invite
        return None

    async def find_by_token(self, token: InviteToken) -> Optional[Invite]:
        """Find an invite by its token."""
        for invite in self._db.invites:
            if invite.invite_token == token:
                return invite
        return None

    async def find_open_personal(
        self, inviter_id: UserId, email: str
    ) -> Optional[Invite]:
        """Find the unredeemed personal invite for an inviter/email pair."""
        for invite in self._db.invites:
            if (
                invite.inviter_id == inviter_id
                and invite.email == email.lower()
                and invite.is_personal
                and invite.status != InviteStatus.SIGNED_UP
            ):
                return invite
        return None

    async def find_by_inviter(self, inviter_id: UserId) -> list[Invite]:
        """Find invites by inviter, newest first."""
        invites = [i for i in self._db.invites if i.inviter_id == inviter_id]
        return sorted(invites, key=lambda i: i.sent_at, reverse=True)

    async def save(self, invite: Invite) -> Invite:
        """Insert an invite.

        Raises:
            DuplicateRecordError: If the token or open inviter/email pair exists
        """
        if await self.find_by_token(invite.invite_token):
            raise DuplicateRecordError("invite", "invite_token")
        if invite.is_personal and await self.find_open_personal(
            invite.inviter_id, invite.email
        ):
            raise DuplicateRecordError("invite", "open personal invite")
        self._db.invites.append(invite)
        return invite

    async def mark_clicked(self, token: InviteToken, at: datetime) -> bool:
        """Move sent -> clicked."""
        invite = await self.find_by_token(token)
        if not invite or invite.status != InviteStatus.SENT:
            return False
        self._replace(
            invite.model_copy(
                update={
                    "status": InviteStatus.CLICKED,
                    "clicked_at": invite.clicked_at or at,
                }
            )
        )
        return True

    async def redeem(
        self,
        invite_id: InviteId,
        user_id: UserId,
        at: datetime,
        claimed_email: str | None,
        claimed_wallet_address: str | None,
    ) -> bool:
        """Mark signed_up unless already signed_up."""
        invite = await self.find_by_id(invite_id)
        if not invite or invite.status == InviteStatus.SIGNED_UP:
            return False
        self._replace(
            invite.model_copy(
                update={
                    "status": InviteStatus.SIGNED_UP,
                    "invited_user_id": user_id,
                    "clicked_at": invite.clicked_at or at,
                    "redeemed_at": invite.redeemed_at or at,
                    "claimed_email": claimed_email,
                    "claimed_wallet_address": claimed_wallet_address,
                }
            )
        )
        return True
