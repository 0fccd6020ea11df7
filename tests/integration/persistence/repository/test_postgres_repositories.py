"""Integration tests for the PostgreSQL repositories.

Run against a migrated database:

    DATABASE__URL=postgresql+asyncpg://... alembic upgrade head
    DATABASE__URL=postgresql+asyncpg://... pytest -m integration
"""

import os
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from haven.domain.error import DuplicateRecordError
from haven.domain.model import Contact, Invite
from haven.domain.repository import (
    ContactRepository,
    InviteRepository,
    UserRepository,
)
from haven.domain.value import (
    ContactId,
    ContactStatus,
    InviteId,
    InviteStatus,
    InviteToken,
)
from tests.conftest import make_user
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.getenv("DATABASE__URL"), reason="DATABASE__URL not set"
    ),
]

integration_env = create_env_fixture(unmock={"persistence"})


def _email(name: str) -> str:
    return f"{name}-{uuid4().hex[:8]}@example.com"


def _code() -> str:
    return "HVN_" + uuid4().hex[:6].upper()


class TestUserRepository:
    """PostgresUserRepository."""

    @pytest.mark.asyncio
    async def test_set_referred_by_only_once(self, integration_env):
        repo = await integration_env.get(UserRepository)
        alice = await make_user(repo, _email("alice"), _code())
        carol = await make_user(repo, _email("carol"), _code())
        bob = await make_user(repo, _email("bob"), _code())

        assert await repo.set_referred_by(bob.id, alice.id) is True
        assert await repo.set_referred_by(bob.id, carol.id) is False
        assert (await repo.find_by_id(bob.id)).referred_by == alice.id

    @pytest.mark.asyncio
    async def test_cannot_refer_self(self, integration_env):
        repo = await integration_env.get(UserRepository)
        alice = await make_user(repo, _email("alice"), _code())

        assert await repo.set_referred_by(alice.id, alice.id) is False

    @pytest.mark.asyncio
    async def test_referrals_are_a_set(self, integration_env):
        repo = await integration_env.get(UserRepository)
        alice = await make_user(repo, _email("alice"), _code())
        bob = await make_user(repo, _email("bob"), _code())

        assert await repo.add_referral(alice.id, bob.id) is True
        assert await repo.add_referral(alice.id, bob.id) is False
        assert await repo.list_referral_ids(alice.id) == [bob.id]

    @pytest.mark.asyncio
    async def test_save_keeps_referred_by(self, integration_env):
        repo = await integration_env.get(UserRepository)
        alice = await make_user(repo, _email("alice"), _code())
        bob = await make_user(repo, _email("bob"), _code())
        await repo.set_referred_by(bob.id, alice.id)

        saved = await repo.save(bob.model_copy(update={"first_name": "Bob"}))

        assert saved.referred_by == alice.id
        assert saved.first_name == "Bob"

    @pytest.mark.asyncio
    async def test_duplicate_referral_code(self, integration_env):
        repo = await integration_env.get(UserRepository)
        code = _code()
        await make_user(repo, _email("alice"), code)

        with pytest.raises(DuplicateRecordError):
            await make_user(repo, _email("bob"), code)

    @pytest.mark.asyncio
    async def test_pending_wallet_is_shared(self, integration_env):
        repo = await integration_env.get(UserRepository)

        await make_user(repo, _email("a"), _code())
        await make_user(repo, _email("b"), _code())


class TestContactRepository:
    """PostgresContactRepository."""

    @pytest.mark.asyncio
    async def test_insertion_order_and_match(self, integration_env):
        users = await integration_env.get(UserRepository)
        repo = await integration_env.get(ContactRepository)
        owner = await make_user(users, _email("owner"), _code())

        for email in ("c@example.com", "a@example.com"):
            await repo.save(
                Contact(id=ContactId(uuid4()), owner_id=owner.id, email=email)
            )
        await repo.save(
            Contact(id=ContactId(uuid4()), owner_id=owner.id, wallet_address="So1")
        )

        contacts = await repo.find_by_owner(owner.id)
        assert [c.email for c in contacts] == ["c@example.com", "a@example.com", None]
        match = await repo.find_match(owner.id, "A@example.com", None)
        assert match.email == "a@example.com"
        assert (await repo.find_match(owner.id, None, "So1")).wallet_address == "So1"

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, integration_env):
        users = await integration_env.get(UserRepository)
        repo = await integration_env.get(ContactRepository)
        owner = await make_user(users, _email("owner"), _code())
        await repo.save(
            Contact(id=ContactId(uuid4()), owner_id=owner.id, email="x@example.com")
        )

        with pytest.raises(DuplicateRecordError):
            await repo.save(
                Contact(
                    id=ContactId(uuid4()),
                    owner_id=owner.id,
                    email="x@example.com",
                    status=ContactStatus.INVITED,
                )
            )


class TestInviteRepository:
    """PostgresInviteRepository."""

    def _invite(self, inviter_id, email: str) -> Invite:
        return Invite(
            id=InviteId(uuid4()),
            inviter_id=inviter_id,
            email=email,
            invite_token=InviteToken(uuid4().hex),
            is_personal=True,
            status=InviteStatus.SENT,
            sent_at=datetime.now(timezone.utc),
        )

    @pytest.mark.asyncio
    async def test_one_open_invite_per_email(self, integration_env):
        users = await integration_env.get(UserRepository)
        repo = await integration_env.get(InviteRepository)
        alice = await make_user(users, _email("alice"), _code())
        await repo.save(self._invite(alice.id, "bob@example.com"))

        with pytest.raises(DuplicateRecordError):
            await repo.save(self._invite(alice.id, "bob@example.com"))

    @pytest.mark.asyncio
    async def test_status_moves_forward_only(self, integration_env):
        users = await integration_env.get(UserRepository)
        repo = await integration_env.get(InviteRepository)
        alice = await make_user(users, _email("alice"), _code())
        bob = await make_user(users, _email("bob"), _code())
        invite = await repo.save(self._invite(alice.id, bob.email))
        now = datetime.now(timezone.utc)

        assert await repo.redeem(invite.id, bob.id, now, bob.email, None) is True
        assert await repo.redeem(invite.id, alice.id, now, None, None) is False
        assert await repo.mark_clicked(invite.invite_token, now) is False

        stored = await repo.find_by_id(invite.id)
        assert stored.status == InviteStatus.SIGNED_UP
        assert stored.invited_user_id == bob.id
        assert stored.clicked_at is not None
