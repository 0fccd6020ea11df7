"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from haven.domain.model.user import User
from haven.domain.value import ReferralCode, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_identity(self, identity_id: str) -> Optional[User]:
        """Find a user by their identity provider id.

        Args:
            identity_id: Stable identity string from the identity provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive)."""
        pass

    @abstractmethod
    async def find_by_wallet(self, wallet_address: str) -> Optional[User]:
        """Find a user by wallet address."""
        pass

    @abstractmethod
    async def find_by_referral_code(self, code: ReferralCode) -> Optional[User]:
        """Find a user by exact referral code."""
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users at once.

        Missing ids are skipped. Order is not guaranteed.
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        referred_by is not written by save; use set_referred_by.

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            DuplicateRecordError: If email, wallet or referral code is taken
        """
        pass

    @abstractmethod
    async def set_referred_by(self, user_id: UserId, referrer_id: UserId) -> bool:
        """Set referred_by only if it is still unset.

        Args:
            user_id: The referred user
            referrer_id: The referrer

        Returns:
            True if this call set the value, False if it was already set
        """
        pass

    @abstractmethod
    async def add_referral(self, referrer_id: UserId, referred_id: UserId) -> bool:
        """Add a user to the referrer's referral set.

        Returns:
            True if added, False if it was already a member
        """
        pass

    @abstractmethod
    async def list_referral_ids(self, referrer_id: UserId) -> list[UserId]:
        """List the ids of users referred by a user, oldest first."""
        pass
