"""Session JWT utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from haven.config import AuthSettings


class SessionPayload(BaseModel):
    """Session token payload.

    sub is the identity provider's user id; user_id and email are hints
    recorded at sign-in time.
    """

    sub: str
    user_id: str | None = None
    email: str | None = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    sub: str,
    settings: AuthSettings,
    user_id: str | None = None,
    email: str | None = None,
) -> str:
    """Create a session token.

    Args:
        sub: Identity provider user id
        settings: Authentication settings
        user_id: Haven user id
        email: User email

    Returns:
        Encoded JWT token

    Raises:
        JWTError: If sub is empty
    """
    if not sub:
        raise JWTError("Cannot sign session token without sub")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "user_id": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(seconds=settings.session_ttl_seconds),
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> SessionPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    if not isinstance(payload.get("sub"), str):
        raise JWTError("Invalid token")
    return SessionPayload(**payload)
