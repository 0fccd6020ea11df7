"""Upsert contact use case."""

from pydantic import BaseModel

from haven.application.usecase.common import ContactInfo, ContactListResponse
from haven.domain.error import ValidationError
from haven.domain.model import ContactPatch
from haven.domain.model.user import utcnow
from haven.domain.service import ContactService, UserService
from haven.domain.value import ContactStatus, Email


class UpsertContactRequest(BaseModel):
    """Upsert contact request.

    At least one of email or wallet_address is required.
    """

    identity_id: str | None
    name: str | None = None
    email: str | None = None
    wallet_address: str | None = None


class UpsertContactUseCase:
    """Use case for adding or updating a contact.

    A contact whose email belongs to a Haven user becomes active, taking
    that user's wallet unless the request names one; any other contact is
    external.
    """

    def __init__(
        self, contact_service: ContactService, user_service: UserService
    ) -> None:
        """Initialize upsert contact use case.

        Args:
            contact_service: Contact domain service
            user_service: User domain service
        """
        self.contact_service = contact_service
        self.user_service = user_service

    async def execute(self, request: UpsertContactRequest) -> ContactListResponse:
        """Execute upsert contact flow.

        Args:
            request: Upsert contact request

        Returns:
            The caller's updated contact list

        Raises:
            ValidationError: If neither email nor wallet is given, or the
                email is malformed
        """
        caller = await self.user_service.get_caller(request.identity_id)

        email = request.email.strip() if request.email else None
        wallet = request.wallet_address.strip() if request.wallet_address else None
        if not email and not wallet:
            raise ValidationError("Either email or wallet_address is required")

        if email:
            try:
                email = Email(email).root
            except ValueError:
                raise ValidationError("A valid email is required")

        patch = ContactPatch(
            name=request.name.strip() if request.name else None,
            email=email,
            wallet_address=wallet,
            status=ContactStatus.EXTERNAL,
        )

        haven_user = await self.user_service.get_user_by_email(email) if email else None
        if haven_user and haven_user.id != caller.id:
            patch = patch.model_copy(
                update={
                    "wallet_address": wallet
                    or (haven_user.wallet_address if haven_user.has_wallet else None),
                    "haven_user_id": haven_user.id,
                    "status": ContactStatus.ACTIVE,
                    "joined_at": utcnow(),
                }
            )

        await self.contact_service.upsert(caller.id, patch)
        contacts = await self.contact_service.list_contacts(caller.id)
        return ContactListResponse(
            contacts=[ContactInfo.from_contact(c) for c in contacts]
        )
