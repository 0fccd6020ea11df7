"""Referral routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from haven.application.usecase.referral import (
    ClaimReferralRequest,
    ClaimReferralResponse,
    ClaimReferralUseCase,
)
from haven.domain.service import JWTService
from haven.interface.api.session import SESSION_COOKIE, identity_from_cookie

router = APIRouter(prefix="/referrals", tags=["referrals"], route_class=DishkaRoute)


class ClaimReferralAPIRequest(BaseModel):
    """API request for claiming a referral code."""

    referral_code: str = ""


@router.post("/claim", response_model=ClaimReferralResponse)
async def claim_referral(
    request: ClaimReferralAPIRequest,
    claim_referral_use_case: FromDishka[ClaimReferralUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> ClaimReferralResponse:
    """Link the caller to the owner of a referral code.

    A caller who already has a referrer gets ok with reason
    "already_referred" and nothing changes.
    """
    return await claim_referral_use_case.execute(
        ClaimReferralRequest(
            identity_id=identity_from_cookie(jwt_service, session_token),
            referral_code=request.referral_code,
        )
    )
