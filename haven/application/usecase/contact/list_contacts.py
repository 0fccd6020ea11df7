"""List contacts use case."""

from pydantic import BaseModel

from haven.application.usecase.common import ContactInfo, ContactListResponse
from haven.domain.service import ContactService, UserService


class ListContactsRequest(BaseModel):
    """List contacts request."""

    identity_id: str | None


class ListContactsUseCase:
    """Use case for listing the caller's contacts."""

    def __init__(
        self, contact_service: ContactService, user_service: UserService
    ) -> None:
        self.contact_service = contact_service
        self.user_service = user_service

    async def execute(self, request: ListContactsRequest) -> ContactListResponse:
        """Execute list contacts flow."""
        caller = await self.user_service.get_caller(request.identity_id)
        contacts = await self.contact_service.list_contacts(caller.id)
        return ContactListResponse(
            contacts=[ContactInfo.from_contact(c) for c in contacts]
        )
