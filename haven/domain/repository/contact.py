"""Contact repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from haven.domain.model.contact import Contact
from haven.domain.value import ContactId, UserId


class ContactRepository(ABC):
    """Repository for Contact entries, keyed by owner."""

    @abstractmethod
    async def find_by_owner(self, owner_id: UserId) -> list[Contact]:
        """Find all contacts of a user in insertion order.

        Args:
            owner_id: The owning user's ID

        Returns:
            List of contacts, oldest first
        """
        pass

    @abstractmethod
    async def find_match(
        self,
        owner_id: UserId,
        email: str | None,
        wallet_address: str | None,
    ) -> Optional[Contact]:
        """Find the contact matching an email or wallet.

        Email is compared case-insensitively and tried first; wallet is
        compared exactly. The first match in insertion order wins.

        Args:
            owner_id: The owning user's ID
            email: Email to match
            wallet_address: Wallet address to match

        Returns:
            The matching contact if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, contact: Contact) -> Contact:
        """Save a contact (create or update).

        Raises:
            DuplicateRecordError: If the owner already has an entry with the
                same email or wallet
        """
        pass

    @abstractmethod
    async def delete(self, contact_id: ContactId) -> None:
        """Delete one contact by ID."""
        pass

    @abstractmethod
    async def delete_matching(
        self,
        owner_id: UserId,
        email: str | None,
        wallet_address: str | None,
    ) -> int:
        """Delete every contact matching either key.

        Returns:
            Number of deleted entries
        """
        pass
