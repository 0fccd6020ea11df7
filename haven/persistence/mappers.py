"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from haven.domain.model import Contact, Invite, User
from haven.domain.value import (
    ContactId,
    ContactStatus,
    DisplayCurrency,
    FinancialKnowledgeLevel,
    InviteId,
    InviteStatus,
    InviteToken,
    ReferralCode,
    RiskLevel,
    UserId,
)


def _uuid(value: Any) -> UUID | None:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    referred_by = _uuid(row.get("referred_by"))
    return User(
        id=UserId(_uuid(row["id"])),
        identity_id=row["identity_id"],
        email=row["email"],
        wallet_address=row["wallet_address"],
        referral_code=ReferralCode(row["referral_code"]),
        referred_by=UserId(referred_by) if referred_by else None,
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        country=row.get("country"),
        display_currency=DisplayCurrency(row["display_currency"]),
        profile_image_url=row.get("profile_image_url"),
        financial_knowledge_level=FinancialKnowledgeLevel(
            row["financial_knowledge_level"]
        ),
        risk_level=RiskLevel(row["risk_level"]),
        is_pro=row["is_pro"],
        is_onboarded=row["is_onboarded"],
        last_login_at=row.get("last_login_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    referred_by is left out; it is only written by the conditional update.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "identity_id": user.identity_id,
        "email": user.email,
        "wallet_address": user.wallet_address,
        "referral_code": user.referral_code.root,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "country": user.country,
        "display_currency": user.display_currency.value,
        "profile_image_url": user.profile_image_url,
        "financial_knowledge_level": user.financial_knowledge_level.value,
        "risk_level": user.risk_level.value,
        "is_pro": user.is_pro,
        "is_onboarded": user.is_onboarded,
        "last_login_at": user.last_login_at,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_contact(row: Dict[str, Any]) -> Contact:
    """Convert database row to Contact domain model."""
    haven_user_id = _uuid(row.get("haven_user_id"))
    return Contact(
        id=ContactId(_uuid(row["id"])),
        owner_id=UserId(_uuid(row["owner_id"])),
        name=row.get("name"),
        email=row.get("email"),
        wallet_address=row.get("wallet_address"),
        haven_user_id=UserId(haven_user_id) if haven_user_id else None,
        status=ContactStatus(row["status"]),
        invited_at=row.get("invited_at"),
        joined_at=row.get("joined_at"),
        created_at=row["created_at"],
    )


def contact_to_dict(contact: Contact) -> Dict[str, Any]:
    """Convert Contact domain model to database dict."""
    return {
        "id": contact.id,
        "owner_id": contact.owner_id,
        "name": contact.name,
        "email": contact.email,
        "wallet_address": contact.wallet_address,
        "haven_user_id": contact.haven_user_id,
        "status": contact.status.value,
        "invited_at": contact.invited_at,
        "joined_at": contact.joined_at,
        "created_at": contact.created_at,
    }


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model
    """
    invited_user_id = _uuid(row.get("invited_user_id"))
    return Invite(
        id=InviteId(_uuid(row["id"])),
        inviter_id=UserId(_uuid(row["inviter_id"])),
        email=row["email"],
        invite_token=InviteToken(row["invite_token"]),
        is_personal=row["is_personal"],
        status=InviteStatus(row["status"]),
        sent_at=row["sent_at"],
        clicked_at=row.get("clicked_at"),
        redeemed_at=row.get("redeemed_at"),
        invited_user_id=UserId(invited_user_id) if invited_user_id else None,
        claimed_email=row.get("claimed_email"),
        claimed_wallet_address=row.get("claimed_wallet_address"),
        recipient_name=row.get("recipient_name"),
        message=row.get("message"),
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    Args:
        invite: Invite domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": invite.id,
        "inviter_id": invite.inviter_id,
        "email": invite.email,
        "invite_token": invite.invite_token.root,
        "is_personal": invite.is_personal,
        "status": invite.status.value,
        "sent_at": invite.sent_at,
        "clicked_at": invite.clicked_at,
        "redeemed_at": invite.redeemed_at,
        "invited_user_id": invite.invited_user_id,
        "claimed_email": invite.claimed_email,
        "claimed_wallet_address": invite.claimed_wallet_address,
        "recipient_name": invite.recipient_name,
        "message": invite.message,
    }
