"""Get current user use case."""

from datetime import datetime

from pydantic import BaseModel

from haven.application.usecase.common import ContactInfo, InviteInfo
from haven.domain.service import ContactService, InviteService, UserService
from haven.domain.value import DisplayCurrency, FinancialKnowledgeLevel, RiskLevel


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    identity_id: str | None


class ReferralInfo(BaseModel):
    """A user the caller referred."""

    id: str
    first_name: str | None
    last_name: str | None
    email: str
    wallet_address: str
    profile_image_url: str | None
    created_at: datetime


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    id: str
    email: str
    wallet_address: str
    first_name: str | None
    last_name: str | None
    full_name: str | None
    country: str | None
    display_currency: DisplayCurrency
    profile_image_url: str | None
    financial_knowledge_level: FinancialKnowledgeLevel
    risk_level: RiskLevel
    is_pro: bool
    is_onboarded: bool
    referral_code: str
    referred_by: str | None
    last_login_at: datetime | None
    created_at: datetime
    contacts: list[ContactInfo]
    invites: list[InviteInfo]
    referrals: list[ReferralInfo]
    referral_count: int


class GetCurrentUserUseCase:
    """Use case for getting the current authenticated user."""

    def __init__(
        self,
        user_service: UserService,
        invite_service: InviteService,
        contact_service: ContactService,
    ) -> None:
        """Initialize get current user use case.

        Args:
            user_service: User domain service
            invite_service: Invite domain service
            contact_service: Contact domain service
        """
        self.user_service = user_service
        self.invite_service = invite_service
        self.contact_service = contact_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Raises:
            UnauthorizedError: If there is no session
            NotFoundError: If the session's user no longer exists
        """
        user = await self.user_service.get_caller(request.identity_id)
        contacts = await self.contact_service.list_contacts(user.id)
        invites = await self.invite_service.list_personal(user.id)
        referrals = await self.user_service.list_referrals(user.id)

        return GetCurrentUserResponse(
            id=str(user.id),
            email=user.email,
            wallet_address=user.wallet_address,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            country=user.country,
            display_currency=user.display_currency,
            profile_image_url=user.profile_image_url,
            financial_knowledge_level=user.financial_knowledge_level,
            risk_level=user.risk_level,
            is_pro=user.is_pro,
            is_onboarded=user.is_onboarded,
            referral_code=user.referral_code.root,
            referred_by=str(user.referred_by) if user.referred_by else None,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
            contacts=[ContactInfo.from_contact(c) for c in contacts],
            invites=[InviteInfo.from_invite(i) for i in invites],
            referrals=[
                ReferralInfo(
                    id=str(r.id),
                    first_name=r.first_name,
                    last_name=r.last_name,
                    email=r.email,
                    wallet_address=r.wallet_address,
                    profile_image_url=r.profile_image_url,
                    created_at=r.created_at,
                )
                for r in referrals
            ],
            referral_count=len(referrals),
        )
