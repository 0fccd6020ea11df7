"""Unit tests for ContactService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from haven.domain.error import NotFoundError
from haven.domain.model import Contact, ContactPatch
from haven.domain.repository import ContactRepository, UserRepository
from haven.domain.service import ContactService
from haven.domain.service.contact_service import merge_contact
from haven.domain.value import ContactId, ContactStatus, UserId
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestMergeContact:
    """Tests for merge_contact."""

    def _contact(self, **fields) -> Contact:
        return Contact(id=ContactId(uuid4()), owner_id=UserId(uuid4()), **fields)

    def test_status_never_regresses(self):
        """An active entry stays active when patched as invited or external."""
        contact = self._contact(email="bob@example.com", status=ContactStatus.ACTIVE)

        assert merge_contact(
            contact, ContactPatch(status=ContactStatus.INVITED)
        ).status == ContactStatus.ACTIVE
        assert merge_contact(
            contact, ContactPatch(status=ContactStatus.EXTERNAL)
        ).status == ContactStatus.ACTIVE

    def test_status_advances(self):
        contact = self._contact(email="bob@example.com")

        merged = merge_contact(contact, ContactPatch(status=ContactStatus.INVITED))

        assert merged.status == ContactStatus.INVITED

    def test_timestamps_keep_first_value(self):
        """invited_at and joined_at are written once."""
        first = datetime(2025, 1, 1, tzinfo=timezone.utc)
        later = first + timedelta(days=3)
        contact = self._contact(invited_at=first, joined_at=first)

        merged = merge_contact(contact, ContactPatch(invited_at=later, joined_at=later))

        assert merged.invited_at == first
        assert merged.joined_at == first

    def test_none_fields_do_not_overwrite(self):
        contact = self._contact(name="Bob", wallet_address="So1anaBob")

        merged = merge_contact(contact, ContactPatch(email="bob@example.com"))

        assert merged.name == "Bob"
        assert merged.wallet_address == "So1anaBob"
        assert merged.email == "bob@example.com"

    def test_pending_wallet_is_ignored(self):
        """The placeholder wallet never replaces a real one."""
        contact = self._contact(wallet_address="So1anaBob")

        merged = merge_contact(contact, ContactPatch(wallet_address="pending"))

        assert merged.wallet_address == "So1anaBob"


class TestUpsert:
    """Tests for upsert."""

    @pytest.mark.asyncio
    async def test_appends_new_contact(self, unit_env):
        service = await unit_env.get(ContactService)
        owner_id = UserId(uuid4())

        contact = await service.upsert(
            owner_id, ContactPatch(name="Bob", email="Bob@Example.com")
        )

        assert contact.email == "bob@example.com"
        assert contact.status == ContactStatus.EXTERNAL
        assert await service.list_contacts(owner_id) == [contact]

    @pytest.mark.asyncio
    async def test_matches_existing_by_email_case_insensitive(self, unit_env):
        """A second upsert with the same email updates the entry in place."""
        service = await unit_env.get(ContactService)
        owner_id = UserId(uuid4())
        first = await service.upsert(owner_id, ContactPatch(email="bob@example.com"))

        second = await service.upsert(
            owner_id,
            ContactPatch(email="BOB@example.com", wallet_address="So1anaBob"),
        )

        assert second.id == first.id
        assert second.wallet_address == "So1anaBob"
        assert len(await service.list_contacts(owner_id)) == 1

    @pytest.mark.asyncio
    async def test_matches_existing_by_wallet(self, unit_env):
        service = await unit_env.get(ContactService)
        owner_id = UserId(uuid4())
        first = await service.upsert(
            owner_id, ContactPatch(wallet_address="So1anaBob")
        )

        second = await service.upsert(
            owner_id,
            ContactPatch(name="Bob", email="bob@example.com", wallet_address="So1anaBob"),
        )

        assert second.id == first.id
        assert second.email == "bob@example.com"
        assert second.name == "Bob"

    @pytest.mark.asyncio
    async def test_preserves_insertion_order(self, unit_env):
        service = await unit_env.get(ContactService)
        owner_id = UserId(uuid4())
        for email in ("c@example.com", "a@example.com", "b@example.com"):
            await service.upsert(owner_id, ContactPatch(email=email))
        await service.upsert(
            owner_id, ContactPatch(email="a@example.com", status=ContactStatus.INVITED)
        )

        contacts = await service.list_contacts(owner_id)

        assert [c.email for c in contacts] == [
            "c@example.com",
            "a@example.com",
            "b@example.com",
        ]

    @pytest.mark.asyncio
    async def test_keys_on_two_entries_merge_into_email_match(self, unit_env):
        """Email and wallet held by different entries collapse into one."""
        # Arrange
        service = await unit_env.get(ContactService)
        owner_id = UserId(uuid4())
        by_wallet = await service.upsert(
            owner_id,
            ContactPatch(name="Bobby", wallet_address="So1anaBob"),
        )
        by_email = await service.upsert(
            owner_id,
            ContactPatch(email="bob@example.com", status=ContactStatus.INVITED),
        )
        await service.upsert(owner_id, ContactPatch(email="carol@example.com"))

        # Act
        merged = await service.upsert(
            owner_id,
            ContactPatch(email="BOB@example.com", wallet_address="So1anaBob"),
        )

        # Assert
        assert merged.id == by_email.id
        assert merged.wallet_address == "So1anaBob"
        assert merged.name == "Bobby"
        assert merged.status == ContactStatus.INVITED
        assert merged.created_at == by_wallet.created_at
        contacts = await service.list_contacts(owner_id)
        assert [c.email for c in contacts] == ["bob@example.com", "carol@example.com"]

    @pytest.mark.asyncio
    async def test_contacts_are_per_owner(self, unit_env):
        service = await unit_env.get(ContactService)
        alice_id, carol_id = UserId(uuid4()), UserId(uuid4())

        await service.upsert(alice_id, ContactPatch(email="bob@example.com"))
        await service.upsert(carol_id, ContactPatch(email="bob@example.com"))

        assert len(await service.list_contacts(alice_id)) == 1
        assert len(await service.list_contacts(carol_id)) == 1


class TestRemove:
    """Tests for remove."""

    @pytest.mark.asyncio
    async def test_removes_by_email_or_wallet(self, unit_env):
        service = await unit_env.get(ContactService)
        owner_id = UserId(uuid4())
        await service.upsert(owner_id, ContactPatch(email="bob@example.com"))
        await service.upsert(owner_id, ContactPatch(wallet_address="So1anaCarol"))
        await service.upsert(owner_id, ContactPatch(email="dan@example.com"))

        removed = await service.remove(owner_id, "BOB@example.com", "So1anaCarol")

        assert removed == 2
        contacts = await service.list_contacts(owner_id)
        assert [c.email for c in contacts] == ["dan@example.com"]

    @pytest.mark.asyncio
    async def test_remove_without_match_is_noop(self, unit_env):
        service = await unit_env.get(ContactService)
        owner_id = UserId(uuid4())
        await service.upsert(owner_id, ContactPatch(email="bob@example.com"))

        assert await service.remove(owner_id, "nobody@example.com", None) == 0
        assert len(await service.list_contacts(owner_id)) == 1


class TestResolve:
    """Tests for resolve."""

    @pytest.mark.asyncio
    async def test_haven_user_wallet_wins(self, unit_env):
        """A Haven user with a wallet is authoritative over the saved contact."""
        # Arrange
        service = await unit_env.get(ContactService)
        user_repo = await unit_env.get(UserRepository)
        contact_repo = await unit_env.get(ContactRepository)
        owner = await make_user(user_repo, "alice@example.com")
        bob = await make_user(
            user_repo,
            "bob@example.com",
            wallet_address="So1anaBobNew",
            first_name="Bob",
        )
        await service.upsert(
            owner.id,
            ContactPatch(email="bob@example.com", wallet_address="So1anaBobOld"),
        )

        # Act
        resolved = await service.resolve(owner.id, "Bob@Example.com")

        # Assert
        assert resolved.wallet_address == "So1anaBobNew"
        assert resolved.status == ContactStatus.ACTIVE
        assert resolved.name == "Bob"
        contact = (await contact_repo.find_by_owner(owner.id))[0]
        assert contact.wallet_address == "So1anaBobNew"
        assert contact.haven_user_id == bob.id
        assert contact.status == ContactStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_falls_back_to_saved_wallet(self, unit_env):
        service = await unit_env.get(ContactService)
        owner_id = UserId(uuid4())
        await service.upsert(
            owner_id,
            ContactPatch(name="Eve", email="eve@example.com", wallet_address="So1anaEve"),
        )

        resolved = await service.resolve(owner_id, "eve@example.com")

        assert resolved.wallet_address == "So1anaEve"
        assert resolved.status == ContactStatus.EXTERNAL
        assert resolved.name == "Eve"

    @pytest.mark.asyncio
    async def test_haven_user_without_wallet_is_not_resolved(self, unit_env):
        """A pending wallet cannot receive funds."""
        service = await unit_env.get(ContactService)
        user_repo = await unit_env.get(UserRepository)
        owner = await make_user(user_repo, "alice@example.com")
        await make_user(user_repo, "bob@example.com")

        with pytest.raises(NotFoundError):
            await service.resolve(owner.id, "bob@example.com")

    @pytest.mark.asyncio
    async def test_unknown_email_raises_not_found(self, unit_env):
        service = await unit_env.get(ContactService)

        with pytest.raises(NotFoundError):
            await service.resolve(UserId(uuid4()), "ghost@example.com")
