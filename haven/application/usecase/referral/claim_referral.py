"""Claim referral use case."""

from pydantic import BaseModel

from haven.application.usecase.common import InviterInfo
from haven.domain.service import ReferralService, UserService


class ClaimReferralRequest(BaseModel):
    """Claim referral request."""

    identity_id: str | None  # Caller identity from session
    referral_code: str


class ClaimReferralResponse(BaseModel):
    """Claim referral response.

    reason is "already_referred" when the caller already had a referrer.
    """

    ok: bool = True
    reason: str | None = None
    message: str | None = None
    inviter: InviterInfo | None = None


class ClaimReferralUseCase:
    """Use case for linking the caller to the owner of a referral code."""

    def __init__(
        self, referral_service: ReferralService, user_service: UserService
    ) -> None:
        """Initialize claim referral use case.

        Args:
            referral_service: Referral linking domain service
            user_service: User domain service
        """
        self.referral_service = referral_service
        self.user_service = user_service

    async def execute(self, request: ClaimReferralRequest) -> ClaimReferralResponse:
        """Execute claim referral flow.

        Args:
            request: Claim referral request

        Returns:
            Inviter identity, or an already_referred signal
        """
        caller = await self.user_service.get_caller(request.identity_id)
        claim = await self.referral_service.claim_with_code(
            caller, request.referral_code
        )

        inviter = InviterInfo.from_user(claim.inviter) if claim.inviter else None
        if claim.already_referred:
            return ClaimReferralResponse(
                reason="already_referred",
                message="Referral already set for this account.",
                inviter=inviter,
            )
        return ClaimReferralResponse(inviter=inviter)
