"""In-memory user repository for testing."""

from typing import Optional

from haven.domain.error import DuplicateRecordError
from haven.domain.model.user import User
from haven.domain.repository.user import UserRepository
from haven.domain.value import PENDING_WALLET, ReferralCode, UserId

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, db: InMemoryDatabase | None = None) -> None:
        self._db = db or InMemoryDatabase()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._db.users.get(user_id)

    async def find_by_identity(self, identity_id: str) -> Optional[User]:
        """Find a user by identity provider id."""
        for user in self._db.users.values():
            if user.identity_id == identity_id:
                return user
        return None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive)."""
        for user in self._db.users.values():
            if user.email.lower() == email.lower():
                return user
        return None

    async def find_by_wallet(self, wallet_address: str) -> Optional[User]:
        """Find a user by wallet address."""
        for user in self._db.users.values():
            if user.wallet_address == wallet_address:
                return user
        return None

    async def find_by_referral_code(self, code: ReferralCode) -> Optional[User]:
        """Find a user by referral code."""
        for user in self._db.users.values():
            if user.referral_code == code:
                return user
        return None

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users by ID."""
        return [self._db.users[i] for i in user_ids if i in self._db.users]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Raises:
            DuplicateRecordError: If a unique field is held by another user
        """
        for other in self._db.users.values():
            if other.id == user.id:
                continue
            if other.identity_id == user.identity_id:
                raise DuplicateRecordError("user", "identity_id")
            if other.email.lower() == user.email.lower():
                raise DuplicateRecordError("user", "email")
            if other.referral_code == user.referral_code:
                raise DuplicateRecordError("user", "referral_code")
            if (
                user.wallet_address != PENDING_WALLET
                and other.wallet_address == user.wallet_address
            ):
                raise DuplicateRecordError("user", "wallet_address")

        # referred_by is only written by set_referred_by
        existing = self._db.users.get(user.id)
        referred_by = existing.referred_by if existing else None
        stored = user.model_copy(update={"referred_by": referred_by})
        self._db.users[user.id] = stored
        return stored

    async def set_referred_by(self, user_id: UserId, referrer_id: UserId) -> bool:
        """Set referred_by only while it is unset."""
        user = self._db.users.get(user_id)
        if not user or user.referred_by is not None or user_id == referrer_id:
            return False
        self._db.users[user_id] = user.model_copy(update={"referred_by": referrer_id})
        return True

    async def add_referral(self, referrer_id: UserId, referred_id: UserId) -> bool:
        """Add a referral pair if not present."""
        pair = (referrer_id, referred_id)
        if pair in self._db.referrals:
            return False
        self._db.referrals.append(pair)
        return True

    async def list_referral_ids(self, referrer_id: UserId) -> list[UserId]:
        """List referred user ids, oldest first."""
        return [r for (owner, r) in self._db.referrals if owner == referrer_id]
