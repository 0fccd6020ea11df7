"""Contact routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel

from haven.application.usecase.common import ContactListResponse
from haven.application.usecase.contact import (
    ListContactsRequest,
    ListContactsUseCase,
    RemoveContactRequest,
    RemoveContactUseCase,
    ResolveContactRequest,
    ResolveContactResponse,
    ResolveContactUseCase,
    UpsertContactRequest,
    UpsertContactUseCase,
)
from haven.domain.service import JWTService
from haven.interface.api.session import SESSION_COOKIE, identity_from_cookie

router = APIRouter(prefix="/contacts", tags=["contacts"], route_class=DishkaRoute)


class UpsertContactAPIRequest(BaseModel):
    """API request for adding or updating a contact."""

    name: str | None = None
    email: str | None = None
    wallet_address: str | None = None


class RemoveContactAPIRequest(BaseModel):
    """API request for removing contacts."""

    email: str | None = None
    wallet_address: str | None = None


@router.get("", response_model=ContactListResponse)
async def list_contacts(
    list_contacts_use_case: FromDishka[ListContactsUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> ContactListResponse:
    """List the caller's contacts in insertion order."""
    return await list_contacts_use_case.execute(
        ListContactsRequest(identity_id=identity_from_cookie(jwt_service, session_token))
    )


@router.post("", response_model=ContactListResponse)
async def upsert_contact(
    request: UpsertContactAPIRequest,
    upsert_contact_use_case: FromDishka[UpsertContactUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> ContactListResponse:
    """Add a contact or merge into the matching one."""
    return await upsert_contact_use_case.execute(
        UpsertContactRequest(
            identity_id=identity_from_cookie(jwt_service, session_token),
            **request.model_dump(),
        )
    )


@router.delete("", response_model=ContactListResponse)
async def remove_contact(
    request: RemoveContactAPIRequest,
    remove_contact_use_case: FromDishka[RemoveContactUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> ContactListResponse:
    """Remove every contact matching the email or wallet."""
    return await remove_contact_use_case.execute(
        RemoveContactRequest(
            identity_id=identity_from_cookie(jwt_service, session_token),
            **request.model_dump(),
        )
    )


@router.get("/resolve", response_model=ResolveContactResponse)
async def resolve_contact(
    resolve_contact_use_case: FromDishka[ResolveContactUseCase],
    jwt_service: FromDishka[JWTService],
    email: str = Query(default=""),
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
) -> ResolveContactResponse:
    """Resolve an email to the wallet address to send to."""
    return await resolve_contact_use_case.execute(
        ResolveContactRequest(
            identity_id=identity_from_cookie(jwt_service, session_token),
            email=email,
        )
    )
