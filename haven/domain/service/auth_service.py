"""Authentication domain service."""

import logfire

from haven.domain.value import IdentityInfo

from .base import Service


class IdentityClient:
    """Identity provider client interface."""

    async def verify_access_token(self, access_token: str) -> IdentityInfo:
        """Verify a provider access token.

        Args:
            access_token: Token issued to the browser by the provider

        Returns:
            Identity carried by the token

        Raises:
            IdentityProviderError: If the token is invalid
        """
        raise NotImplementedError

    async def get_profile(self, identity_id: str) -> IdentityInfo:
        """Fetch the provider's profile for an identity.

        Args:
            identity_id: Provider user id

        Returns:
            Identity with email and wallet when the provider has them
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for identity provider authentication."""

    def __init__(self, identity_client: IdentityClient) -> None:
        """Initialize auth service.

        Args:
            identity_client: Identity provider client
        """
        self.identity_client = identity_client

    async def authenticate(self, access_token: str) -> IdentityInfo:
        """Verify an access token and enrich it with the provider profile.

        A failed profile fetch is tolerated; the token's own claims are
        returned instead.

        Raises:
            IdentityProviderError: If the token is invalid
        """
        with logfire.span("auth_service.authenticate"):
            claims = await self.identity_client.verify_access_token(access_token)
            try:
                profile = await self.identity_client.get_profile(claims.identity_id)
            except Exception as e:
                logfire.warn(
                    "Identity profile fetch failed",
                    identity_id=claims.identity_id,
                    error=str(e),
                )
                return claims

            return IdentityInfo(
                identity_id=claims.identity_id,
                email=profile.email or claims.email,
                wallet_address=profile.wallet_address or claims.wallet_address,
            )
