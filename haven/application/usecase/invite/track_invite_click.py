"""Track invite click use case."""

import logfire
from pydantic import BaseModel

from haven.domain.error import ValidationError
from haven.domain.service import InviteService
from haven.domain.value import InviteStatus, InviteToken


class TrackInviteClickRequest(BaseModel):
    """Track invite click request (no authentication)."""

    invite_token: str


class TrackInviteClickResponse(BaseModel):
    """Track invite click response."""

    ok: bool
    status: InviteStatus | None = None


class TrackInviteClickUseCase:
    """Use case for recording that an invite link was opened.

    Best effort: an unknown token or a storage failure yields ok=False,
    never an error.
    """

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(
        self, request: TrackInviteClickRequest
    ) -> TrackInviteClickResponse:
        """Execute track invite click flow.

        Raises:
            ValidationError: If the token is blank
        """
        if not request.invite_token or not request.invite_token.strip():
            raise ValidationError("invite_token is required")

        try:
            invite = await self.invite_service.track_click(
                InviteToken(request.invite_token)
            )
        except Exception as e:
            logfire.error("Invite click tracking failed", error=str(e))
            return TrackInviteClickResponse(ok=False)

        if not invite:
            return TrackInviteClickResponse(ok=False)
        return TrackInviteClickResponse(ok=True, status=invite.status)
