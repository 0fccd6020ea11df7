"""User aggregate root.

Users authenticate through the identity provider, receive a wallet address
and take part in the referral program.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from haven.domain.model.common import DomainModel
from haven.domain.value import (
    PENDING_WALLET,
    DisplayCurrency,
    FinancialKnowledgeLevel,
    ReferralCode,
    RiskLevel,
    UserId,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(DomainModel):
    """User aggregate root.

    Business rules:
    - referral_code is unique and never changes once assigned
    - referred_by is set at most once and never equals id
    - email is unique and stored lowercased
    """

    id: UserId
    identity_id: str  # Stable identity from the identity provider
    email: str
    wallet_address: str = PENDING_WALLET
    referral_code: ReferralCode
    referred_by: Optional[UserId] = None

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    country: Optional[str] = None
    display_currency: DisplayCurrency = DisplayCurrency.USD
    profile_image_url: Optional[str] = None
    financial_knowledge_level: FinancialKnowledgeLevel = FinancialKnowledgeLevel.NONE
    risk_level: RiskLevel = RiskLevel.LOW
    is_pro: bool = False
    is_onboarded: bool = False

    last_login_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def has_wallet(self) -> bool:
        """Whether a real wallet address (not the placeholder) is on record."""
        return bool(self.wallet_address) and self.wallet_address != PENDING_WALLET

    @property
    def full_name(self) -> Optional[str]:
        """First and last name joined, or None when neither is set."""
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) if parts else None
