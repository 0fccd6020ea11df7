"""Exception handlers turning domain and adapter errors into JSON responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from haven.adapter.error import IdentityProviderError
from haven.domain.error import DomainError
from haven.persistence.database import UnitOfWork

STATUS_BY_REASON = {
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_code": status.HTTP_404_NOT_FOUND,
    "invalid_input": status.HTTP_400_BAD_REQUEST,
    "self_referral": status.HTTP_400_BAD_REQUEST,
    "wrong_recipient": status.HTTP_403_FORBIDDEN,
    "already_referred": status.HTTP_409_CONFLICT,
    "already_used": status.HTTP_409_CONFLICT,
    "conflict": status.HTTP_409_CONFLICT,
}


def error_body(reason: str, message: str) -> dict:
    return {"ok": False, "reason": reason, "message": message}


async def rollback_request(request: Request) -> None:
    """Mark the request's unit of work so its transaction is not committed."""
    container = getattr(request.state, "dishka_container", None)
    if container is not None:
        unit_of_work = await container.get(UnitOfWork)
        unit_of_work.mark_rollback_only()


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as {ok, reason, message}."""
    await rollback_request(request)
    status_code = STATUS_BY_REASON.get(exc.reason, status.HTTP_400_BAD_REQUEST)
    logfire.info(
        "Request failed",
        path=request.url.path,
        reason=exc.reason,
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code, content=error_body(exc.reason, exc.message)
    )


async def handle_identity_error(
    request: Request, exc: IdentityProviderError
) -> JSONResponse:
    """Render an identity provider rejection as 401."""
    await rollback_request(request)
    logfire.warn("Identity provider rejected request", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=error_body("unauthorized", str(exc)),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(IdentityProviderError, handle_identity_error)
