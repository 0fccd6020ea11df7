"""Session token domain service."""

import logfire

from haven.config import AuthSettings
from haven.util.jwt import SessionPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(
        self, identity_id: str, user_id: str | None = None, email: str | None = None
    ) -> str:
        """Create a session token for a caller.

        Args:
            identity_id: Identity provider user id
            user_id: Haven user id
            email: User email

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(identity_id, self.auth_settings, user_id, email)
            logfire.info("Session token created", user_id=user_id)
            return token

    def verify_token(self, token: str) -> SessionPayload:
        """Verify a session token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except Exception as e:
                logfire.error("Session token verification failed", error=str(e))
                raise

    def get_identity_from_token(self, token: str | None) -> str | None:
        """Extract the caller identity from a session token without raising.

        Args:
            token: Session token (optional)

        Returns:
            Identity id if token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token).sub
        except Exception as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "Session verification failed, treating as unauthenticated",
                error=str(e),
            )
            return None
