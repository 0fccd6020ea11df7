"""Invite use cases."""

from haven.application.usecase.invite.claim_invite import (
    ClaimInviteRequest,
    ClaimInviteResponse,
    ClaimInviteUseCase,
)
from haven.application.usecase.invite.get_invites import (
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
)
from haven.application.usecase.invite.issue_personal_invite import (
    IssuePersonalInviteRequest,
    IssuePersonalInviteResponse,
    IssuePersonalInviteUseCase,
)
from haven.application.usecase.invite.track_invite_click import (
    TrackInviteClickRequest,
    TrackInviteClickResponse,
    TrackInviteClickUseCase,
)

__all__ = [
    "ClaimInviteRequest",
    "ClaimInviteResponse",
    "ClaimInviteUseCase",
    "GetInvitesRequest",
    "GetInvitesResponse",
    "GetInvitesUseCase",
    "IssuePersonalInviteRequest",
    "IssuePersonalInviteResponse",
    "IssuePersonalInviteUseCase",
    "TrackInviteClickRequest",
    "TrackInviteClickResponse",
    "TrackInviteClickUseCase",
]
