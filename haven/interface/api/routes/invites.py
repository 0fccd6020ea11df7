"""Invite routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel

from haven.application.usecase.invite import (
    ClaimInviteRequest,
    ClaimInviteResponse,
    ClaimInviteUseCase,
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
    IssuePersonalInviteRequest,
    IssuePersonalInviteResponse,
    IssuePersonalInviteUseCase,
    TrackInviteClickRequest,
    TrackInviteClickResponse,
    TrackInviteClickUseCase,
)
from haven.domain.service import JWTService
from haven.interface.api.session import SESSION_COOKIE, identity_from_cookie

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class PersonalInviteAPIRequest(BaseModel):
    """API request for issuing a personal invite."""

    email: str = ""
    recipient_name: str | None = None
    message: str | None = None


class ClaimInviteAPIRequest(BaseModel):
    """API request for claiming an invite."""

    invite_token: str = ""
    referral_code: str | None = None


class TrackInviteAPIRequest(BaseModel):
    """API request for tracking an invite click."""

    invite_token: str = ""


@router.get("", response_model=GetInvitesResponse)
async def get_invites(
    get_invites_use_case: FromDishka[GetInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> GetInvitesResponse:
    """List the caller's personal invites, newest first."""
    return await get_invites_use_case.execute(
        GetInvitesRequest(identity_id=identity_from_cookie(jwt_service, session_token))
    )


@router.post("/personal", response_model=IssuePersonalInviteResponse)
async def issue_personal_invite(
    request: PersonalInviteAPIRequest,
    response: Response,
    issue_use_case: FromDishka[IssuePersonalInviteUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> IssuePersonalInviteResponse:
    """Issue an email-bound invite link.

    Returns 201 when a new invite was created, 200 when an open invite was
    reused or the email already belongs to a Haven user.
    """
    result = await issue_use_case.execute(
        IssuePersonalInviteRequest(
            identity_id=identity_from_cookie(jwt_service, session_token),
            email=request.email,
            recipient_name=request.recipient_name,
            message=request.message,
        )
    )
    if result.ok and not result.reused:
        response.status_code = status.HTTP_201_CREATED
    return result


@router.post("/claim", response_model=ClaimInviteResponse)
async def claim_invite(
    request: ClaimInviteAPIRequest,
    claim_invite_use_case: FromDishka[ClaimInviteUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> ClaimInviteResponse:
    """Redeem a personal invite and link the caller to its inviter."""
    return await claim_invite_use_case.execute(
        ClaimInviteRequest(
            identity_id=identity_from_cookie(jwt_service, session_token),
            invite_token=request.invite_token,
            referral_code=request.referral_code,
        )
    )


@router.post("/track", response_model=TrackInviteClickResponse)
async def track_invite_click(
    request: TrackInviteAPIRequest,
    track_use_case: FromDishka[TrackInviteClickUseCase],
) -> TrackInviteClickResponse:
    """Record that an invite link was opened. No authentication required."""
    return await track_use_case.execute(
        TrackInviteClickRequest(invite_token=request.invite_token)
    )
