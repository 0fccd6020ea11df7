"""Referral linking domain service.

Both claim paths, a bare referral code and an email-bound invite token,
end in the same link: the caller's referred_by points at the inviter and
the inviter's referral set contains the caller. Every check runs against
loaded snapshots before any write, and writes are conditional so a lost
race is reconciled by re-reading rather than overwriting.
"""

from dataclasses import dataclass

import logfire

from haven.domain.error import (
    AlreadyReferredError,
    InvalidReferralCodeError,
    InviteAlreadyUsedError,
    NotFoundError,
    SelfReferralError,
    ValidationError,
    WrongRecipientError,
)
from haven.domain.model import ContactPatch, Invite, User
from haven.domain.model.user import utcnow
from haven.domain.repository import UserRepository
from haven.domain.value import ContactStatus, InviteStatus, InviteToken, ReferralCode

from .base import Service
from .contact_service import ContactService
from .invite_service import InviteService


@dataclass
class ReferralClaim:
    """Outcome of a referral code claim."""

    inviter: User | None
    already_referred: bool = False


@dataclass
class InviteClaim:
    """Outcome of an invite token claim."""

    inviter: User
    invite: Invite
    already_linked: bool = False


class ReferralService(Service):
    """Domain service linking new users to whoever referred them."""

    def __init__(
        self,
        user_repository: UserRepository,
        invite_service: InviteService,
        contact_service: ContactService,
    ) -> None:
        """Initialize referral service.

        Args:
            user_repository: User repository
            invite_service: Invite domain service
            contact_service: Contact domain service
        """
        self.user_repository = user_repository
        self.invite_service = invite_service
        self.contact_service = contact_service

    async def claim_with_code(self, caller: User, code: str) -> ReferralClaim:
        """Link the caller to the owner of a referral code.

        A caller who already has a referrer gets an already_referred result
        and nothing changes.

        Args:
            caller: The authenticated user
            code: Referral code, matched exactly

        Returns:
            The inviter and whether the caller was already referred

        Raises:
            ValidationError: If the code is blank
            InvalidReferralCodeError: If no user owns the code
            SelfReferralError: If the code is the caller's own
        """
        if not code or not code.strip():
            raise ValidationError("referral_code is required")

        with logfire.span(
            "referral_service.claim_with_code", user_id=str(caller.id), code=code
        ):
            if caller.referred_by:
                logfire.info("Caller already referred", user_id=str(caller.id))
                referrer = await self.user_repository.find_by_id(caller.referred_by)
                return ReferralClaim(inviter=referrer, already_referred=True)

            inviter = await self.user_repository.find_by_referral_code(
                ReferralCode(code)
            )
            if not inviter:
                logfire.warn("Invalid referral code", code=code)
                raise InvalidReferralCodeError(code)

            if inviter.id == caller.id:
                logfire.warn("Self referral attempted", user_id=str(caller.id))
                raise SelfReferralError("You cannot use your own referral code.")

            if not await self._link(caller, inviter):
                return ReferralClaim(inviter=inviter, already_referred=True)

            logfire.info(
                "Referral linked",
                user_id=str(caller.id),
                referrer_id=str(inviter.id),
            )
            return ReferralClaim(inviter=inviter)

    async def claim_with_invite(self, caller: User, token: str) -> InviteClaim:
        """Redeem a personal invite and link the caller to its inviter.

        Replaying a claim the caller already completed succeeds with
        already_linked set and changes nothing.

        Args:
            caller: The authenticated user
            token: Invite token from the invite link

        Returns:
            The inviter, the invite's current state and already_linked

        Raises:
            ValidationError: If the token is blank
            AlreadyReferredError: If the caller has a different referral
            NotFoundError: If the token or its inviter does not exist
            SelfReferralError: If the caller issued the invite
            WrongRecipientError: If the invite was sent to another email
            InviteAlreadyUsedError: If another user redeemed the invite
        """
        if not token or not token.strip():
            raise ValidationError("invite_token is required")
        invite_token = InviteToken(token)

        with logfire.span(
            "referral_service.claim_with_invite",
            user_id=str(caller.id),
            token=invite_token.root[:8] + "...",
        ):
            invite = await self.invite_service.find_personal_by_token(invite_token)

            if caller.referred_by and not (
                invite
                and invite.invited_user_id == caller.id
                and invite.inviter_id == caller.referred_by
            ):
                logfire.warn("Caller already referred", user_id=str(caller.id))
                raise AlreadyReferredError()

            if not invite:
                raise NotFoundError("Invite", invite_token.root[:8] + "...")

            inviter = await self.user_repository.find_by_id(invite.inviter_id)
            if not inviter:
                logfire.error("Inviter missing for invite", invite_id=str(invite.id))
                raise NotFoundError("Inviter", str(invite.inviter_id))

            if inviter.id == caller.id:
                logfire.warn("Self invite claim attempted", user_id=str(caller.id))
                raise SelfReferralError("You cannot use your own invite.")

            if invite.email.lower() != caller.email.lower():
                logfire.warn(
                    "Invite claimed by wrong recipient",
                    invite_id=str(invite.id),
                    user_id=str(caller.id),
                )
                raise WrongRecipientError()

            already_linked = False
            if invite.status == InviteStatus.SIGNED_UP:
                if invite.invited_user_id != caller.id:
                    logfire.warn("Invite already used", invite_id=str(invite.id))
                    raise InviteAlreadyUsedError()
                already_linked = True

            wallet = caller.wallet_address if caller.has_wallet else None
            if not already_linked:
                redeemed = await self.invite_service.redeem(
                    invite, caller.id, caller.email, wallet
                )
                if not redeemed:
                    current = await self.invite_service.get_by_id(invite.id)
                    if not current or current.invited_user_id != caller.id:
                        raise InviteAlreadyUsedError()
                    already_linked = True

            now = utcnow()
            await self.contact_service.upsert(
                inviter.id,
                ContactPatch(
                    name=caller.full_name,
                    email=caller.email,
                    wallet_address=wallet,
                    haven_user_id=caller.id,
                    status=ContactStatus.ACTIVE,
                    invited_at=invite.sent_at,
                    joined_at=now,
                ),
            )

            if not await self._link(caller, inviter):
                raise AlreadyReferredError()

            invite = await self.invite_service.get_by_id(invite.id) or invite
            logfire.info(
                "Invite claimed",
                invite_id=str(invite.id),
                user_id=str(caller.id),
                referrer_id=str(inviter.id),
                already_linked=already_linked,
            )
            return InviteClaim(
                inviter=inviter, invite=invite, already_linked=already_linked
            )

    async def _link(self, caller: User, inviter: User) -> bool:
        """Set caller.referred_by and add the caller to the inviter's referrals.

        Returns:
            True if the caller is now linked to this inviter, False if a
            different referrer was set first
        """
        if caller.id == inviter.id:
            raise SelfReferralError("You cannot refer yourself.")

        if not await self.user_repository.set_referred_by(caller.id, inviter.id):
            current = await self.user_repository.find_by_id(caller.id)
            if not current or current.referred_by != inviter.id:
                logfire.warn(
                    "Referral link lost to another referrer",
                    user_id=str(caller.id),
                )
                return False

        await self.user_repository.add_referral(inviter.id, caller.id)
        return True
