"""Application layer DI providers."""

from dishka import Scope, provide_all

from haven.application.usecase.auth import CreateSessionUseCase, GetCurrentUserUseCase
from haven.application.usecase.contact import (
    ListContactsUseCase,
    RemoveContactUseCase,
    ResolveContactUseCase,
    UpsertContactUseCase,
)
from haven.application.usecase.invite import (
    ClaimInviteUseCase,
    GetInvitesUseCase,
    IssuePersonalInviteUseCase,
    TrackInviteClickUseCase,
)
from haven.application.usecase.referral import ClaimReferralUseCase
from haven.application.usecase.user import OnboardUserUseCase
from haven.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Use cases, built per request from their constructor annotations."""

    scope = Scope.REQUEST

    auth = provide_all(CreateSessionUseCase, GetCurrentUserUseCase, OnboardUserUseCase)
    linking = provide_all(ClaimReferralUseCase, ClaimInviteUseCase)
    invites = provide_all(
        GetInvitesUseCase, IssuePersonalInviteUseCase, TrackInviteClickUseCase
    )
    contacts = provide_all(
        ListContactsUseCase,
        RemoveContactUseCase,
        ResolveContactUseCase,
        UpsertContactUseCase,
    )
