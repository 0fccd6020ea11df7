"""Domain layer DI providers."""

from dishka import Scope, provide

from haven.config import AuthSettings, InvitationSettings
from haven.domain.repository import (
    ContactRepository,
    InviteRepository,
    UserRepository,
)
from haven.domain.service import (
    AuthService,
    ContactService,
    IdentityClient,
    InviteService,
    JWTService,
    ReferralService,
    UserService,
)
from haven.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, identity_client: IdentityClient) -> AuthService:
        """Provide identity provider authentication domain service."""
        return AuthService(identity_client=identity_client)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide session token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        invitation_settings: InvitationSettings,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_contact_service(
        self,
        contact_repository: ContactRepository,
        user_repository: UserRepository,
    ) -> ContactService:
        """Provide contact domain service."""
        return ContactService(
            contact_repository=contact_repository, user_repository=user_repository
        )

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        invitation_settings: InvitationSettings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_referral_service(
        self,
        user_repository: UserRepository,
        invite_service: InviteService,
        contact_service: ContactService,
    ) -> ReferralService:
        """Provide referral linking domain service."""
        return ReferralService(
            user_repository=user_repository,
            invite_service=invite_service,
            contact_service=contact_service,
        )
