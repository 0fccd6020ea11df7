"""Invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from haven.domain.model.invite import Invite
from haven.domain.value import InviteId, InviteToken, UserId


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InviteToken) -> Invite | None:
        """Find an invite by token.

        Used when a recipient opens or claims an invite link.

        Args:
            token: The invite token

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_open_personal(self, inviter_id: UserId, email: str) -> Invite | None:
        """Find the unredeemed personal invite from an inviter to an email.

        Args:
            inviter_id: The inviter's ID
            email: Lowercased target email

        Returns:
            The open invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_inviter(self, inviter_id: UserId) -> list[Invite]:
        """Find all invites issued by a user, newest first."""
        pass

    @abstractmethod
    async def save(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Args:
            invite: The invite to save

        Returns:
            The saved invite

        Raises:
            DuplicateRecordError: If the token is taken or an open personal
                invite already exists for this inviter/email
        """
        pass

    @abstractmethod
    async def mark_clicked(self, token: InviteToken, at: datetime) -> bool:
        """Move an invite from sent to clicked.

        Returns:
            True if the invite was in sent status and is now clicked
        """
        pass

    @abstractmethod
    async def redeem(
        self,
        invite_id: InviteId,
        user_id: UserId,
        at: datetime,
        claimed_email: str | None,
        claimed_wallet_address: str | None,
    ) -> bool:
        """Mark an invite signed_up and bind it to a user.

        Applies only while the invite is not yet signed_up. clicked_at and
        redeemed_at keep their first value.

        Returns:
            True if this call redeemed the invite
        """
        pass
