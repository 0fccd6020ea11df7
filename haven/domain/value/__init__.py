"""Domain value objects for Haven."""

from haven.domain.value.identifiers import ContactId, InviteId, UserId
from haven.domain.value.types import (
    EMAIL_PATTERN,
    PENDING_WALLET,
    ContactStatus,
    DisplayCurrency,
    Email,
    FinancialKnowledgeLevel,
    IdentityInfo,
    InviteStatus,
    InviteToken,
    ReferralCode,
    RiskLevel,
)

__all__ = [
    # Identifiers
    "UserId",
    "ContactId",
    "InviteId",
    # Types
    "EMAIL_PATTERN",
    "PENDING_WALLET",
    "ContactStatus",
    "DisplayCurrency",
    "Email",
    "FinancialKnowledgeLevel",
    "IdentityInfo",
    "InviteStatus",
    "InviteToken",
    "ReferralCode",
    "RiskLevel",
]
