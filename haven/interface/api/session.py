"""Session cookie helpers shared by the routes."""

from fastapi import Response

from haven.config import AuthSettings
from haven.domain.service import JWTService

SESSION_COOKIE = "haven_session"


def identity_from_cookie(jwt_service: JWTService, session_token: str | None) -> str | None:
    """Resolve the session cookie to the caller's identity.

    Returns None when the cookie is missing, invalid or expired; the use
    case then rejects the request as unauthorized.
    """
    return jwt_service.get_identity_from_token(session_token)


def set_session_cookie(response: Response, token: str, settings: AuthSettings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
        path="/",
        max_age=settings.session_ttl_seconds,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE, path="/")
