"""Get invites use case."""

from pydantic import BaseModel

from haven.application.usecase.common import InviteInfo
from haven.domain.service import InviteService, UserService


class GetInvitesRequest(BaseModel):
    """Get invites request."""

    identity_id: str | None


class GetInvitesResponse(BaseModel):
    """Get invites response."""

    invites: list[InviteInfo]


class GetInvitesUseCase:
    """Use case for listing the caller's personal invites."""

    def __init__(
        self,
        invite_service: InviteService,
        user_service: UserService,
    ) -> None:
        """Initialize get invites use case.

        Args:
            invite_service: Invite service
            user_service: User service
        """
        self.invite_service = invite_service
        self.user_service = user_service

    async def execute(self, request: GetInvitesRequest) -> GetInvitesResponse:
        """Execute get invites flow.

        Returns:
            Personal invites, newest first
        """
        caller = await self.user_service.get_caller(request.identity_id)
        invites = await self.invite_service.list_personal(caller.id)
        return GetInvitesResponse(
            invites=[InviteInfo.from_invite(invite) for invite in invites]
        )
