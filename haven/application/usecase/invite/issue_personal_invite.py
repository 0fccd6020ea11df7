"""Issue personal invite use case."""

from urllib.parse import quote

import logfire
from pydantic import BaseModel

from haven.application.usecase.common import InviteInfo
from haven.config import Settings
from haven.domain.error import ValidationError
from haven.domain.model import ContactPatch
from haven.domain.model.user import utcnow
from haven.domain.service import ContactService, InviteService, UserService
from haven.domain.value import ContactStatus, Email


class IssuePersonalInviteRequest(BaseModel):
    """Issue personal invite request."""

    identity_id: str | None
    email: str
    recipient_name: str | None = None
    message: str | None = None


class IssuePersonalInviteResponse(BaseModel):
    """Issue personal invite response.

    When the email already belongs to a Haven user, ok is False with reason
    "already_on_haven" and no invite is created.
    """

    ok: bool = True
    reason: str | None = None
    message: str | None = None
    reused: bool = False
    invite: InviteInfo | None = None
    link: str | None = None
    path: str | None = None


class IssuePersonalInviteUseCase:
    """Use case for creating an email-bound invite link."""

    def __init__(
        self,
        user_service: UserService,
        invite_service: InviteService,
        contact_service: ContactService,
        settings: Settings,
    ) -> None:
        """Initialize issue personal invite use case.

        Args:
            user_service: User domain service
            invite_service: Invite domain service
            contact_service: Contact domain service
            settings: Application settings, for the frontend URL
        """
        self.user_service = user_service
        self.invite_service = invite_service
        self.contact_service = contact_service
        self.settings = settings

    async def execute(
        self, request: IssuePersonalInviteRequest
    ) -> IssuePersonalInviteResponse:
        """Execute issue personal invite flow.

        Args:
            request: Issue personal invite request

        Returns:
            The invite and its shareable link, or an already_on_haven result

        Raises:
            ValidationError: If the email is malformed
        """
        caller = await self.user_service.get_caller(request.identity_id)

        try:
            email = Email(request.email).root
        except ValueError:
            raise ValidationError("A valid email is required")

        with logfire.span("issue_personal_invite", inviter_id=str(caller.id)):
            existing_user = await self.user_service.get_user_by_email(email)
            if existing_user:
                if existing_user.id != caller.id:
                    await self.contact_service.upsert(
                        caller.id,
                        ContactPatch(
                            name=existing_user.full_name,
                            email=email,
                            wallet_address=(
                                existing_user.wallet_address
                                if existing_user.has_wallet
                                else None
                            ),
                            haven_user_id=existing_user.id,
                            status=ContactStatus.ACTIVE,
                            joined_at=utcnow(),
                        ),
                    )
                logfire.info("Invite target already on Haven", inviter_id=str(caller.id))
                return IssuePersonalInviteResponse(
                    ok=False,
                    reason="already_on_haven",
                    message="That email is already a Haven user. No personal invite created.",
                )

            invite, reused = await self.invite_service.issue(
                caller.id,
                email,
                recipient_name=request.recipient_name,
                message=request.message,
            )

            if not reused:
                await self.contact_service.upsert(
                    caller.id,
                    ContactPatch(
                        name=request.recipient_name,
                        email=email,
                        status=ContactStatus.INVITED,
                        invited_at=invite.sent_at,
                    ),
                )

            path = f"/sign-in?invite={quote(invite.invite_token.root)}"
            return IssuePersonalInviteResponse(
                reused=reused,
                invite=InviteInfo.from_invite(invite),
                link=self.settings.api.link(path),
                path=path,
            )
