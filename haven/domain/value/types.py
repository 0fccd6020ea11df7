"""Domain value objects for Haven.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from haven.domain.value.common import RootValueObject, ValueObject

# Wallet address stored on a user record until a real wallet exists
PENDING_WALLET = "pending"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InviteStatus(str, Enum):
    """Status of a personal invite.

    Moves forward only: sent -> clicked -> signed_up.
    """

    SENT = "sent"
    CLICKED = "clicked"
    SIGNED_UP = "signed_up"

    @property
    def rank(self) -> int:
        return _INVITE_STATUS_ORDER.index(self)


_INVITE_STATUS_ORDER = [InviteStatus.SENT, InviteStatus.CLICKED, InviteStatus.SIGNED_UP]


class ContactStatus(str, Enum):
    """Relationship between a user and one of their contacts.

    Moves forward only: external -> invited -> active.
    """

    EXTERNAL = "external"
    INVITED = "invited"
    ACTIVE = "active"

    @property
    def rank(self) -> int:
        return _CONTACT_STATUS_ORDER.index(self)

    def advance(self, other: "ContactStatus | None") -> "ContactStatus":
        """Return the later of this status and another."""
        if other is None or other.rank <= self.rank:
            return self
        return other


_CONTACT_STATUS_ORDER = [
    ContactStatus.EXTERNAL,
    ContactStatus.INVITED,
    ContactStatus.ACTIVE,
]


class FinancialKnowledgeLevel(str, Enum):
    """Self-reported financial knowledge."""

    NONE = "none"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class RiskLevel(str, Enum):
    """Self-reported risk appetite."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DisplayCurrency(str, Enum):
    """Currencies a user can display balances in."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    CAD = "CAD"
    AUD = "AUD"
    NZD = "NZD"
    JPY = "JPY"
    CHF = "CHF"
    SEK = "SEK"
    NOK = "NOK"
    DKK = "DKK"
    PLN = "PLN"
    CZK = "CZK"
    HUF = "HUF"
    RON = "RON"
    BGN = "BGN"
    HRK = "HRK"
    BRL = "BRL"
    MXN = "MXN"
    CLP = "CLP"
    COP = "COP"
    PEN = "PEN"
    ARS = "ARS"
    CNY = "CNY"
    HKD = "HKD"
    SGD = "SGD"
    KRW = "KRW"
    INR = "INR"
    IDR = "IDR"
    THB = "THB"
    MYR = "MYR"
    PHP = "PHP"
    VND = "VND"
    TWD = "TWD"
    PKR = "PKR"
    ILS = "ILS"
    AED = "AED"
    SAR = "SAR"
    QAR = "QAR"
    KWD = "KWD"
    BHD = "BHD"
    ZAR = "ZAR"
    NGN = "NGN"
    GHS = "GHS"
    KES = "KES"
    MAD = "MAD"
    USDC = "USDC"


class Email(RootValueObject[str]):
    """Email address, always stored lowercased and trimmed."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalise and validate email format."""
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v


class InviteToken(RootValueObject[str]):
    """URL-safe personal invite token.

    Globally unique across all users.
    """

    @field_validator("root")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Validate token is not empty."""
        v = v.strip()
        if not v:
            raise ValueError("Invite token must not be empty")
        return v


class ReferralCode(RootValueObject[str]):
    """Permanent, shareable referral code (e.g. HVN_AB12CD)."""

    @field_validator("root")
    @classmethod
    def validate_code(cls, v: str) -> str:
        """Validate code is not empty."""
        v = v.strip()
        if not v:
            raise ValueError("Referral code must not be empty")
        return v


class IdentityInfo(ValueObject):
    """Caller identity as reported by the identity provider.

    email and wallet_address are only present when the provider profile
    (or the verified token) exposes them.
    """

    identity_id: str
    email: str | None = None
    wallet_address: str | None = None
