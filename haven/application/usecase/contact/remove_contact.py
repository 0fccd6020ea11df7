"""Remove contact use case."""

from pydantic import BaseModel

from haven.application.usecase.common import ContactInfo, ContactListResponse
from haven.domain.error import ValidationError
from haven.domain.service import ContactService, UserService


class RemoveContactRequest(BaseModel):
    """Remove contact request."""

    identity_id: str | None
    email: str | None = None
    wallet_address: str | None = None


class RemoveContactUseCase:
    """Use case for removing every contact matching an email or wallet."""

    def __init__(
        self, contact_service: ContactService, user_service: UserService
    ) -> None:
        self.contact_service = contact_service
        self.user_service = user_service

    async def execute(self, request: RemoveContactRequest) -> ContactListResponse:
        """Execute remove contact flow.

        Raises:
            ValidationError: If neither email nor wallet is given
        """
        caller = await self.user_service.get_caller(request.identity_id)

        email = request.email.strip() if request.email else None
        wallet = request.wallet_address.strip() if request.wallet_address else None
        if not email and not wallet:
            raise ValidationError("Either email or wallet_address is required")

        await self.contact_service.remove(caller.id, email, wallet)
        contacts = await self.contact_service.list_contacts(caller.id)
        return ContactListResponse(
            contacts=[ContactInfo.from_contact(c) for c in contacts]
        )
