"""Contact directory domain service.

Keeps each user's contact list deduplicated by email or wallet and makes
sure an entry's status only ever moves forward.
"""

from dataclasses import dataclass
from uuid import uuid4

import logfire

from haven.domain.error import DuplicateRecordError, NotFoundError
from haven.domain.model import Contact, ContactPatch
from haven.domain.repository import ContactRepository, UserRepository
from haven.domain.value import PENDING_WALLET, ContactId, ContactStatus, UserId

from .base import Service


@dataclass
class ResolvedContact:
    """Where to send funds for an email."""

    email: str
    wallet_address: str
    status: ContactStatus
    name: str | None = None
    profile_image_url: str | None = None


def merge_contact(contact: Contact, patch: ContactPatch) -> Contact:
    """Merge a patch into an existing contact.

    Non-None fields overwrite, status only advances, and invited_at and
    joined_at keep their first value.
    """
    updates: dict = {}
    if patch.name is not None:
        updates["name"] = patch.name
    if patch.email is not None:
        updates["email"] = patch.email.strip().lower()
    if patch.wallet_address and patch.wallet_address != PENDING_WALLET:
        updates["wallet_address"] = patch.wallet_address
    if patch.haven_user_id is not None:
        updates["haven_user_id"] = patch.haven_user_id
    updates["status"] = contact.status.advance(patch.status)
    updates["invited_at"] = contact.invited_at or patch.invited_at
    updates["joined_at"] = contact.joined_at or patch.joined_at
    return contact.model_copy(update=updates)


def _earliest(first, second):
    if first is None or second is None:
        return first or second
    return min(first, second)


def fold_contact(contact: Contact, duplicate: Contact) -> Contact:
    """Absorb a duplicate entry of the same counterparty into a contact.

    The contact's own values win; the duplicate only fills gaps.
    """
    return contact.model_copy(
        update={
            "name": contact.name or duplicate.name,
            "email": contact.email or duplicate.email,
            "wallet_address": contact.wallet_address or duplicate.wallet_address,
            "haven_user_id": contact.haven_user_id or duplicate.haven_user_id,
            "status": contact.status.advance(duplicate.status),
            "invited_at": _earliest(contact.invited_at, duplicate.invited_at),
            "joined_at": _earliest(contact.joined_at, duplicate.joined_at),
            "created_at": min(contact.created_at, duplicate.created_at),
        }
    )


class ContactService(Service):
    """Domain service for contact directory operations."""

    def __init__(
        self,
        contact_repository: ContactRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize contact service.

        Args:
            contact_repository: Contact repository
            user_repository: User repository, used to resolve Haven users
        """
        self.contact_repository = contact_repository
        self.user_repository = user_repository

    async def list_contacts(self, owner_id: UserId) -> list[Contact]:
        """List a user's contacts in insertion order."""
        with logfire.span("contact_service.list_contacts", owner_id=str(owner_id)):
            return await self.contact_repository.find_by_owner(owner_id)

    async def upsert(self, owner_id: UserId, patch: ContactPatch) -> Contact:
        """Merge a patch into the matching contact or append a new one.

        The patch's email and wallet are the match keys. Email is tried
        first (case-insensitive), then wallet (exact).

        Args:
            owner_id: The owning user's ID
            patch: Fields to merge

        Returns:
            The stored contact
        """
        email = patch.email.strip().lower() if patch.email else None
        wallet = (
            patch.wallet_address
            if patch.wallet_address and patch.wallet_address != PENDING_WALLET
            else None
        )
        with logfire.span(
            "contact_service.upsert",
            owner_id=str(owner_id),
            has_email=bool(email),
            has_wallet=bool(wallet),
        ):
            existing = await self.contact_repository.find_match(owner_id, email, wallet)
            if existing:
                return await self._update(existing, patch)

            contact = Contact(
                id=ContactId(uuid4()),
                owner_id=owner_id,
                name=patch.name,
                email=email,
                wallet_address=wallet,
                haven_user_id=patch.haven_user_id,
                status=patch.status or ContactStatus.EXTERNAL,
                invited_at=patch.invited_at,
                joined_at=patch.joined_at,
            )
            try:
                saved = await self.contact_repository.save(contact)
            except DuplicateRecordError:
                # Lost an insert race; merge into the winner instead
                existing = await self.contact_repository.find_match(
                    owner_id, email, wallet
                )
                if not existing:
                    raise
                logfire.warn("Contact insert conflict reconciled", owner_id=str(owner_id))
                return await self._update(existing, patch)

            logfire.info(
                "Contact added",
                owner_id=str(owner_id),
                contact_id=str(saved.id),
                status=saved.status.value,
            )
            return saved

    async def _update(self, existing: Contact, patch: ContactPatch) -> Contact:
        merged = await self._absorb_duplicates(merge_contact(existing, patch))
        if merged == existing:
            return existing
        saved = await self.contact_repository.save(merged)
        logfire.info(
            "Contact updated",
            owner_id=str(saved.owner_id),
            contact_id=str(saved.id),
            status=saved.status.value,
        )
        return saved

    async def _absorb_duplicates(self, contact: Contact) -> Contact:
        """Fold other entries sharing the contact's email or wallet into it.

        Merging a patch can give an entry a key another entry already holds,
        e.g. an invited email on the entry saved by wallet. Those entries
        describe the same counterparty and are deleted after folding.
        """
        others = [
            c
            for c in await self.contact_repository.find_by_owner(contact.owner_id)
            if c.id != contact.id
        ]
        while True:
            duplicate = next(
                (c for c in others if c.matches(contact.email, contact.wallet_address)),
                None,
            )
            if duplicate is None:
                return contact
            contact = fold_contact(contact, duplicate)
            await self.contact_repository.delete(duplicate.id)
            others.remove(duplicate)
            logfire.info(
                "Duplicate contact merged",
                owner_id=str(contact.owner_id),
                contact_id=str(contact.id),
                merged_id=str(duplicate.id),
            )

    async def remove(
        self, owner_id: UserId, email: str | None, wallet_address: str | None
    ) -> int:
        """Remove every contact matching the email or wallet."""
        with logfire.span("contact_service.remove", owner_id=str(owner_id)):
            removed = await self.contact_repository.delete_matching(
                owner_id, email.strip().lower() if email else None, wallet_address
            )
            logfire.info("Contacts removed", owner_id=str(owner_id), count=removed)
            return removed

    async def resolve(self, owner_id: UserId, email: str) -> ResolvedContact:
        """Resolve an email to a wallet address.

        A Haven user with a real wallet is authoritative. Otherwise the
        owner's saved contact for that email is used if it has a wallet.

        Args:
            owner_id: The user resolving the email
            email: Email to resolve

        Returns:
            Resolved wallet, name and status

        Raises:
            NotFoundError: If neither a Haven user nor a saved wallet exists
        """
        email = email.strip().lower()
        with logfire.span("contact_service.resolve", owner_id=str(owner_id)):
            target = await self.user_repository.find_by_email(email)
            if target and target.has_wallet:
                await self._sync_resolved(owner_id, email, target.id, target.wallet_address)
                return ResolvedContact(
                    email=target.email,
                    wallet_address=target.wallet_address,
                    status=ContactStatus.ACTIVE,
                    name=target.full_name,
                    profile_image_url=target.profile_image_url,
                )

            contact = await self.contact_repository.find_match(owner_id, email, None)
            if contact and contact.wallet_address:
                return ResolvedContact(
                    email=email,
                    wallet_address=contact.wallet_address,
                    status=contact.status,
                    name=contact.name,
                )

            logfire.info("Contact could not be resolved", owner_id=str(owner_id))
            raise NotFoundError("Haven user or external wallet", email)

    async def _sync_resolved(
        self, owner_id: UserId, email: str, user_id: UserId, wallet_address: str
    ) -> None:
        """Point the owner's existing contact for an email at the Haven user.

        Best effort: failures are logged and never fail the resolve.
        """
        try:
            contact = await self.contact_repository.find_match(owner_id, email, None)
            if contact:
                await self._update(
                    contact,
                    ContactPatch(
                        wallet_address=wallet_address,
                        haven_user_id=user_id,
                        status=ContactStatus.ACTIVE,
                    ),
                )
        except Exception as e:
            logfire.warn(
                "Failed to sync contact with Haven user",
                owner_id=str(owner_id),
                error=str(e),
            )
