"""Create session use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from haven.domain.error import ValidationError
from haven.domain.service import AuthService, JWTService, UserService
from haven.domain.value import EMAIL_PATTERN


class CreateSessionRequest(BaseModel):
    """Create session request.

    email and solana_address come from the client and take precedence over
    what the identity provider reports.
    """

    access_token: str
    email: str | None = None
    solana_address: str | None = None


class SessionUser(BaseModel):
    """User summary returned when a session is created."""

    id: str
    email: str
    wallet_address: str
    referral_code: str
    is_onboarded: bool
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime


class CreateSessionResponse(BaseModel):
    """Create session response."""

    ok: bool = True
    is_new_user: bool
    user: SessionUser
    session_token: str  # Set as a cookie by the route, not returned in the body


class CreateSessionUseCase:
    """Use case for signing in through the identity provider.

    Creates the user on first authentication, otherwise refreshes the
    stored email and wallet.
    """

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        user_service: UserService,
    ) -> None:
        """Initialize create session use case.

        Args:
            auth_service: Identity provider domain service
            jwt_service: Session token domain service
            user_service: User domain service
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: CreateSessionRequest) -> CreateSessionResponse:
        """Execute create session flow.

        Args:
            request: Create session request

        Returns:
            Session token and user summary

        Raises:
            ValidationError: If no access token is given
            IdentityProviderError: If the identity provider rejects the token
        """
        access_token = request.access_token.strip() if request.access_token else ""
        if not access_token:
            raise ValidationError("access_token is required")

        with logfire.span("create_session"):
            identity = await self.auth_service.authenticate(access_token)
            existing = await self.user_service.get_by_identity(identity.identity_id)

            email = self._pick_email(request.email, identity.email, existing)
            if not email:
                email = f"{identity.identity_id.replace(':', '_')}@user.haven.local"

            wallet = (
                (request.solana_address or "").strip()
                or identity.wallet_address
                or (existing.wallet_address if existing and existing.has_wallet else None)
            )

            if existing:
                user = await self.user_service.record_login(existing, email, wallet)
                is_new_user = False
            else:
                user = await self.user_service.create_user(
                    identity.identity_id, email, wallet
                )
                is_new_user = True

            token = self.jwt_service.create_token(
                identity.identity_id, user_id=str(user.id), email=user.email
            )
            logfire.info(
                "Session created", user_id=str(user.id), is_new_user=is_new_user
            )

            return CreateSessionResponse(
                is_new_user=is_new_user,
                user=SessionUser(
                    id=str(user.id),
                    email=user.email,
                    wallet_address=user.wallet_address,
                    referral_code=user.referral_code.root,
                    is_onboarded=user.is_onboarded,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    created_at=user.created_at,
                ),
                session_token=token,
            )

    @staticmethod
    def _pick_email(body_email, provider_email, existing) -> str | None:
        for candidate in (body_email, provider_email):
            if candidate:
                candidate = candidate.strip().lower()
                if EMAIL_PATTERN.match(candidate):
                    return candidate
        return existing.email if existing else None
