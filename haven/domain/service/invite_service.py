"""Invite domain service."""

import secrets
from uuid import uuid4

import logfire

from haven.config import InvitationSettings
from haven.domain.error import DuplicateRecordError
from haven.domain.model import Invite
from haven.domain.model.user import utcnow
from haven.domain.repository import InviteRepository
from haven.domain.value import InviteId, InviteStatus, InviteToken, UserId

from .base import Service

TOKEN_ATTEMPTS = 10


class InviteService(Service):
    """Domain service for personal invite operations."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            invitation_settings: Invite token settings
        """
        self.invite_repository = invite_repository
        self.invitation_settings = invitation_settings

    async def find_personal_by_token(self, token: InviteToken) -> Invite | None:
        """Get a personal invite by token.

        Args:
            token: Invite token

        Returns:
            Invite if found, None otherwise
        """
        with logfire.span(
            "invite_service.find_personal_by_token", token=token.root[:8] + "..."
        ):
            invite = await self.invite_repository.find_by_token(token)
            if not invite or not invite.is_personal:
                logfire.warn("Invite not found", token=token.root[:8] + "...")
                return None
            logfire.info(
                "Invite found",
                invite_id=str(invite.id),
                status=invite.status.value,
            )
            return invite

    async def generate_unique_token(self) -> InviteToken:
        """Generate an invite token no existing invite uses.

        Raises:
            RuntimeError: If every attempt collided with an existing token
        """
        for _ in range(TOKEN_ATTEMPTS):
            token = InviteToken(
                secrets.token_urlsafe(self.invitation_settings.invite_token_bytes)
            )
            if not await self.invite_repository.find_by_token(token):
                return token
            logfire.warn("Invite token collision")
        raise RuntimeError("Could not generate a unique invite token")

    async def issue(
        self,
        inviter_id: UserId,
        email: str,
        recipient_name: str | None = None,
        message: str | None = None,
    ) -> tuple[Invite, bool]:
        """Issue a personal invite, or return the open one for this email.

        Args:
            inviter_id: User issuing the invite
            email: Lowercased recipient email
            recipient_name: Optional recipient display name
            message: Optional personal message

        Returns:
            The invite and whether an existing open invite was reused
        """
        with logfire.span("invite_service.issue", inviter_id=str(inviter_id)):
            existing = await self.invite_repository.find_open_personal(inviter_id, email)
            if existing:
                logfire.info(
                    "Reusing open invite",
                    invite_id=str(existing.id),
                    inviter_id=str(inviter_id),
                )
                return existing, True

            for _ in range(TOKEN_ATTEMPTS):
                invite = Invite(
                    id=InviteId(uuid4()),
                    inviter_id=inviter_id,
                    email=email,
                    invite_token=await self.generate_unique_token(),
                    is_personal=True,
                    status=InviteStatus.SENT,
                    sent_at=utcnow(),
                    recipient_name=recipient_name,
                    message=message,
                )
                try:
                    saved = await self.invite_repository.save(invite)
                except DuplicateRecordError:
                    # Either a concurrent issue for the same email won,
                    # or the token was taken in between
                    existing = await self.invite_repository.find_open_personal(
                        inviter_id, email
                    )
                    if existing:
                        return existing, True
                    continue

                logfire.info(
                    "Invite issued",
                    invite_id=str(saved.id),
                    inviter_id=str(inviter_id),
                    token=saved.invite_token.root[:8] + "...",
                )
                return saved, False

            raise RuntimeError("Could not issue invite")

    async def track_click(self, token: InviteToken) -> Invite | None:
        """Record that an invite link was opened.

        Moves sent -> clicked; any other status is left alone.

        Returns:
            The invite after the update, or None if the token is unknown
        """
        with logfire.span("invite_service.track_click", token=token.root[:8] + "..."):
            invite = await self.invite_repository.find_by_token(token)
            if not invite:
                logfire.warn("Tracked unknown invite", token=token.root[:8] + "...")
                return None

            if await self.invite_repository.mark_clicked(token, utcnow()):
                logfire.info("Invite clicked", invite_id=str(invite.id))
                return await self.invite_repository.find_by_token(token)
            return invite

    async def redeem(
        self,
        invite: Invite,
        user_id: UserId,
        claimed_email: str | None,
        claimed_wallet_address: str | None,
    ) -> bool:
        """Mark an invite signed_up for a user.

        Returns:
            True if this call redeemed it, False if it was already signed_up
        """
        with logfire.span(
            "invite_service.redeem", invite_id=str(invite.id), user_id=str(user_id)
        ):
            redeemed = await self.invite_repository.redeem(
                invite.id, user_id, utcnow(), claimed_email, claimed_wallet_address
            )
            if redeemed:
                logfire.info("Invite redeemed", invite_id=str(invite.id))
            else:
                logfire.warn("Invite already redeemed", invite_id=str(invite.id))
            return redeemed

    async def get_by_id(self, invite_id: InviteId) -> Invite | None:
        return await self.invite_repository.find_by_id(invite_id)

    async def list_personal(self, inviter_id: UserId) -> list[Invite]:
        """List a user's personal invites, newest first."""
        with logfire.span("invite_service.list_personal", inviter_id=str(inviter_id)):
            invites = await self.invite_repository.find_by_inviter(inviter_id)
            return [i for i in invites if i.is_personal]
