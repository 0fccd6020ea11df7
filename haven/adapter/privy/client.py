"""Privy identity provider client.

Verifies Privy access tokens (ES256 JWTs) and reads the user's email and
embedded Solana wallet from the Privy REST API.
"""

from typing import Any

import httpx
import jwt
import logfire

from haven.adapter.error import IdentityProviderError
from haven.config import PrivySettings
from haven.domain.service.auth_service import IdentityClient
from haven.domain.value import IdentityInfo


def extract_email(privy_user: dict[str, Any]) -> str | None:
    """Find an email address in a Privy user profile.

    Tries the root email, then an email linked account, then a Google
    OAuth account, then anything email-looking on any linked account.
    """
    root = privy_user.get("email")
    if isinstance(root, str):
        return root
    if isinstance(root, dict) and root.get("address"):
        return str(root["address"])

    accounts = _linked_accounts(privy_user)

    for account in accounts:
        if account.get("type") == "email" and (
            account.get("address") or account.get("email")
        ):
            return str(account.get("address") or account.get("email"))

    for account in accounts:
        if account.get("type") in ("oauth", "google", "google_oauth") and (
            account.get("provider") == "google"
            or account.get("type") == "google_oauth"
        ):
            email = account.get("email") or account.get("address")
            if email:
                return str(email)

    for account in accounts:
        for candidate in (account.get("email"), account.get("address")):
            if candidate and "@" in str(candidate):
                return str(candidate)

    return None


def extract_solana_wallet(privy_user: dict[str, Any]) -> str | None:
    """Find the Solana wallet address in a Privy user profile."""
    for account in _linked_accounts(privy_user):
        if account.get("type") != "wallet":
            continue
        chain = (
            account.get("chain_type")
            or account.get("chainType")
            or account.get("chain")
            or ""
        )
        # Covers "solana", "solana:devnet", "solana:mainnet"
        if "solana" in str(chain).lower():
            return account.get("address") or account.get("public_address")
    return None


def _linked_accounts(privy_user: dict[str, Any]) -> list[dict[str, Any]]:
    accounts = privy_user.get("linked_accounts") or privy_user.get("linkedAccounts")
    return accounts if isinstance(accounts, list) else []


class PrivyIdentityClient(IdentityClient):
    """Identity client backed by Privy."""

    def __init__(self, settings: PrivySettings) -> None:
        """Initialize Privy client.

        Args:
            settings: Privy app credentials and verification key
        """
        self.settings = settings

    async def verify_access_token(self, access_token: str) -> IdentityInfo:
        """Verify a Privy access token.

        Raises:
            IdentityProviderError: If the token is invalid or expired
        """
        if not self.settings.verification_key:
            raise IdentityProviderError("Privy verification key is not configured")

        try:
            claims = jwt.decode(
                access_token,
                self.settings.verification_key,
                algorithms=["ES256"],
                audience=self.settings.app_id,
                issuer=self.settings.issuer,
            )
        except jwt.InvalidTokenError as e:
            logfire.warn("Privy token rejected", error=str(e))
            raise IdentityProviderError(f"Invalid access token: {e}")

        identity_id = claims.get("sub") or claims.get("user_id")
        if not identity_id:
            raise IdentityProviderError("Invalid access token (no subject)")

        return IdentityInfo(
            identity_id=identity_id,
            email=claims.get("email") or claims.get("email_address"),
        )

    async def get_profile(self, identity_id: str) -> IdentityInfo:
        """Fetch the Privy user profile.

        Raises:
            IdentityProviderError: If the API request fails
        """
        url = f"{self.settings.api_url}/users/{identity_id}"
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    url,
                    auth=(self.settings.app_id, self.settings.app_secret),
                    headers={"privy-app-id": self.settings.app_id},
                    timeout=30.0,
                )

                if response.status_code != 200:
                    logfire.error(
                        "Privy user request failed",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise IdentityProviderError(
                        f"User request failed: {response.status_code}"
                    )

                privy_user = response.json()

        except httpx.HTTPError as e:
            logfire.error("Privy user request HTTP error", error=str(e))
            raise IdentityProviderError(f"HTTP error fetching user: {e}")

        return IdentityInfo(
            identity_id=identity_id,
            email=extract_email(privy_user),
            wallet_address=extract_solana_wallet(privy_user),
        )


class MockIdentityClient(IdentityClient):
    """Mock identity client for testing.

    Access tokens of the form ``<identity>`` or ``<identity>|<email>`` or
    ``<identity>|<email>|<wallet>`` are accepted without any network call.
    A token starting with ``invalid`` is rejected.
    """

    async def verify_access_token(self, access_token: str) -> IdentityInfo:
        """Decode a mock access token."""
        if not access_token or access_token.startswith("invalid"):
            raise IdentityProviderError("Invalid access token")
        parts = access_token.split("|")
        return IdentityInfo(
            identity_id=parts[0],
            email=parts[1] if len(parts) > 1 and parts[1] else None,
            wallet_address=parts[2] if len(parts) > 2 and parts[2] else None,
        )

    async def get_profile(self, identity_id: str) -> IdentityInfo:
        """Return an empty profile."""
        return IdentityInfo(identity_id=identity_id)
