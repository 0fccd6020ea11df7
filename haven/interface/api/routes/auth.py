"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Response
from pydantic import BaseModel

from haven.application.usecase.auth import (
    CreateSessionRequest,
    CreateSessionUseCase,
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from haven.application.usecase.auth.create_session import SessionUser
from haven.application.usecase.user import (
    OnboardUserRequest,
    OnboardUserResponse,
    OnboardUserUseCase,
)
from haven.config import AuthSettings
from haven.domain.service import JWTService
from haven.interface.api.session import (
    SESSION_COOKIE,
    clear_session_cookie,
    identity_from_cookie,
    set_session_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class CreateSessionAPIRequest(BaseModel):
    """API request for creating a session.

    The access token may instead be sent as an Authorization bearer header.
    """

    access_token: str | None = None
    email: str | None = None
    solana_address: str | None = None


class CreateSessionAPIResponse(BaseModel):
    """API response for a created session."""

    ok: bool
    is_new_user: bool
    user: SessionUser


class LogoutResponse(BaseModel):
    """Logout response."""

    ok: bool
    message: str


class OnboardAPIRequest(BaseModel):
    """API request for completing the profile."""

    first_name: str | None = None
    last_name: str | None = None
    country: str | None = None
    display_currency: str | None = None
    financial_knowledge_level: str | None = None
    risk_level: str | None = None


@router.post("/session", response_model=CreateSessionAPIResponse)
async def create_session(
    request: CreateSessionAPIRequest,
    response: Response,
    create_session_use_case: FromDishka[CreateSessionUseCase],
    auth_settings: FromDishka[AuthSettings],
    authorization: str | None = Header(default=None),
) -> CreateSessionAPIResponse:
    """Exchange an identity provider access token for a session cookie.

    Args:
        request: Access token plus optional email and wallet hints
        response: Response to set the session cookie on
        create_session_use_case: Create session use case from DI
        auth_settings: Auth settings from DI
        authorization: Optional "Bearer <token>" header

    Returns:
        Whether the user is new, and a summary of the user
    """
    access_token = request.access_token or ""
    if authorization and authorization.startswith("Bearer "):
        access_token = authorization[len("Bearer ") :].strip()

    result = await create_session_use_case.execute(
        CreateSessionRequest(
            access_token=access_token,
            email=request.email,
            solana_address=request.solana_address,
        )
    )

    set_session_cookie(response, result.session_token, auth_settings)
    logger.info("Session issued for user %s", result.user.id)

    return CreateSessionAPIResponse(
        ok=True, is_new_user=result.is_new_user, user=result.user
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response) -> LogoutResponse:
    """Clear the session cookie."""
    clear_session_cookie(response)
    return LogoutResponse(ok=True, message="Logged out")


@router.get("/user", response_model=GetCurrentUserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> GetCurrentUserResponse:
    """Get the authenticated user with contacts, invites and referrals."""
    return await get_current_user_use_case.execute(
        GetCurrentUserRequest(
            identity_id=identity_from_cookie(jwt_service, session_token)
        )
    )


@router.post("/onboard", response_model=OnboardUserResponse)
async def onboard(
    request: OnboardAPIRequest,
    onboard_use_case: FromDishka[OnboardUserUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> OnboardUserResponse:
    """Complete the authenticated user's profile."""
    return await onboard_use_case.execute(
        OnboardUserRequest(
            identity_id=identity_from_cookie(jwt_service, session_token),
            **request.model_dump(),
        )
    )
