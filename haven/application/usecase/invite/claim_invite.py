"""Claim invite use case."""

from pydantic import BaseModel

from haven.application.usecase.common import InviteInfo, InviterInfo
from haven.domain.service import ReferralService, UserService


class ClaimInviteRequest(BaseModel):
    """Claim invite request.

    referral_code is accepted for compatibility and ignored.
    """

    identity_id: str | None
    invite_token: str
    referral_code: str | None = None


class ClaimInviteResponse(BaseModel):
    """Claim invite response."""

    ok: bool = True
    already_linked: bool
    inviter: InviterInfo
    invite: InviteInfo


class ClaimInviteUseCase:
    """Use case for redeeming a personal invite token."""

    def __init__(
        self, referral_service: ReferralService, user_service: UserService
    ) -> None:
        """Initialize claim invite use case.

        Args:
            referral_service: Referral linking domain service
            user_service: User domain service
        """
        self.referral_service = referral_service
        self.user_service = user_service

    async def execute(self, request: ClaimInviteRequest) -> ClaimInviteResponse:
        """Execute claim invite flow.

        Args:
            request: Claim invite request

        Returns:
            Inviter identity and the invite's state
        """
        caller = await self.user_service.get_caller(request.identity_id)
        claim = await self.referral_service.claim_with_invite(
            caller, request.invite_token
        )
        return ClaimInviteResponse(
            already_linked=claim.already_linked,
            inviter=InviterInfo.from_user(claim.inviter),
            invite=InviteInfo.from_invite(claim.invite),
        )
