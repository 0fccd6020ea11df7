"""In-memory contact repository for testing."""

from typing import Optional

from haven.domain.error import DuplicateRecordError
from haven.domain.model.contact import Contact
from haven.domain.repository.contact import ContactRepository
from haven.domain.value import ContactId, UserId

from .database import InMemoryDatabase


class InMemoryContactRepository(ContactRepository):
    """In-memory implementation of ContactRepository for testing."""

    def __init__(self, db: InMemoryDatabase | None = None) -> None:
        self._db = db or InMemoryDatabase()

    async def find_by_owner(self, owner_id: UserId) -> list[Contact]:
        """Find contacts of a user in insertion order."""
        return [c for c in self._db.contacts if c.owner_id == owner_id]

    async def find_match(
        self,
        owner_id: UserId,
        email: str | None,
        wallet_address: str | None,
    ) -> Optional[Contact]:
        """Find by email first, then by wallet."""
        owned = await self.find_by_owner(owner_id)
        if email:
            for contact in owned:
                if contact.matches(email, None):
                    return contact
        if wallet_address:
            for contact in owned:
                if contact.matches(None, wallet_address):
                    return contact
        return None

    async def save(self, contact: Contact) -> Contact:
        """Save a contact (create or update).

        Raises:
            DuplicateRecordError: If another entry of the owner shares the
                email or wallet
        """
        for other in self._db.contacts:
            if other.id == contact.id or other.owner_id != contact.owner_id:
                continue
            if other.matches(contact.email, contact.wallet_address):
                raise DuplicateRecordError("contact", "email or wallet")

        for i, existing in enumerate(self._db.contacts):
            if existing.id == contact.id:
                self._db.contacts[i] = contact
                return contact

        self._db.contacts.append(contact)
        return contact

    async def delete(self, contact_id: ContactId) -> None:
        """Delete one contact by ID."""
        self._db.contacts[:] = [c for c in self._db.contacts if c.id != contact_id]

    async def delete_matching(
        self,
        owner_id: UserId,
        email: str | None,
        wallet_address: str | None,
    ) -> int:
        """Delete contacts matching the email or wallet."""
        if not email and not wallet_address:
            return 0
        before = len(self._db.contacts)
        self._db.contacts[:] = [
            c
            for c in self._db.contacts
            if not (c.owner_id == owner_id and c.matches(email, wallet_address))
        ]
        return before - len(self._db.contacts)
