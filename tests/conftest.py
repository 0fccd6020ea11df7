"""Test configuration and helpers."""

from uuid import uuid4

import logfire

from haven.domain.model import User
from haven.domain.model.user import utcnow
from haven.domain.repository import UserRepository
from haven.domain.value import PENDING_WALLET, ReferralCode, UserId


async def make_user(
    repo: UserRepository,
    email: str,
    referral_code: str | None = None,
    wallet_address: str = PENDING_WALLET,
    identity_id: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Store a user directly through the repository.

    Args:
        repo: User repository to save into
        email: Email (stored lowercased)
        referral_code: Code to assign, random if omitted
        wallet_address: Wallet, "pending" if omitted
        identity_id: Identity provider id, derived from email if omitted

    Returns:
        The saved user
    """
    now = utcnow()
    user = User(
        id=UserId(uuid4()),
        identity_id=identity_id or f"did:privy:{email}",
        email=email.lower(),
        wallet_address=wallet_address,
        referral_code=ReferralCode(
            referral_code or "HVN_" + uuid4().hex[:6].upper()
        ),
        first_name=first_name,
        last_name=last_name,
        last_login_at=now,
        created_at=now,
        updated_at=now,
    )
    return await repo.save(user)


def pytest_configure(config):
    """Keep spans local during tests."""
    logfire.configure(send_to_logfire=False, console=False)
