"""Resolve contact use case."""

from pydantic import BaseModel

from haven.domain.error import ValidationError
from haven.domain.service import ContactService, UserService
from haven.domain.value import ContactStatus


class ResolveContactRequest(BaseModel):
    """Resolve contact request."""

    identity_id: str | None
    email: str


class ResolveContactResponse(BaseModel):
    """Where to send funds for an email."""

    email: str
    name: str | None = None
    wallet_address: str
    status: ContactStatus
    profile_image_url: str | None = None


class ResolveContactUseCase:
    """Use case for resolving an email to a wallet address."""

    def __init__(
        self, contact_service: ContactService, user_service: UserService
    ) -> None:
        """Initialize resolve contact use case.

        Args:
            contact_service: Contact domain service
            user_service: User domain service
        """
        self.contact_service = contact_service
        self.user_service = user_service

    async def execute(self, request: ResolveContactRequest) -> ResolveContactResponse:
        """Execute resolve contact flow.

        Raises:
            ValidationError: If the email is blank
            NotFoundError: If nothing is on file for the email
        """
        email = request.email.strip().lower() if request.email else ""
        if not email:
            raise ValidationError("email is required")

        caller = await self.user_service.get_caller(request.identity_id)
        resolved = await self.contact_service.resolve(caller.id, email)
        return ResolveContactResponse(
            email=resolved.email,
            name=resolved.name,
            wallet_address=resolved.wallet_address,
            status=resolved.status,
            profile_image_url=resolved.profile_image_url,
        )
