"""Unit tests for InviteService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from haven.domain.model import Invite
from haven.domain.repository import InviteRepository
from haven.domain.service import InviteService
from haven.domain.value import InviteId, InviteStatus, InviteToken, UserId
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestIssue:
    """Tests for issue."""

    @pytest.mark.asyncio
    async def test_issue_creates_sent_personal_invite(self, unit_env):
        """Issuing stores a personal invite with status sent."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        inviter_id = UserId(uuid4())

        # Act
        invite, reused = await invite_service.issue(
            inviter_id, "bob@example.com", recipient_name="Bob", message="Join me"
        )

        # Assert
        assert reused is False
        assert invite.is_personal is True
        assert invite.status == InviteStatus.SENT
        assert invite.email == "bob@example.com"
        assert invite.recipient_name == "Bob"
        assert invite.clicked_at is None
        assert invite.redeemed_at is None
        assert await invite_repo.find_by_token(invite.invite_token) == invite

    @pytest.mark.asyncio
    async def test_issue_again_reuses_open_invite(self, unit_env):
        """A second issue to the same email returns the same token."""
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        inviter_id = UserId(uuid4())
        first, _ = await invite_service.issue(inviter_id, "bob@example.com")

        second, reused = await invite_service.issue(inviter_id, "bob@example.com")

        assert reused is True
        assert second.invite_token == first.invite_token
        assert len(await invite_repo.find_by_inviter(inviter_id)) == 1

    @pytest.mark.asyncio
    async def test_issue_after_redemption_creates_new_invite(self, unit_env):
        """Once the open invite is signed_up, a new one is issued."""
        invite_service = await unit_env.get(InviteService)
        inviter_id = UserId(uuid4())
        first, _ = await invite_service.issue(inviter_id, "bob@example.com")
        await invite_service.redeem(first, UserId(uuid4()), "bob@example.com", None)

        second, reused = await invite_service.issue(inviter_id, "bob@example.com")

        assert reused is False
        assert second.invite_token != first.invite_token

    @pytest.mark.asyncio
    async def test_different_issuers_get_separate_invites(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        first, _ = await invite_service.issue(UserId(uuid4()), "bob@example.com")
        second, reused = await invite_service.issue(UserId(uuid4()), "bob@example.com")

        assert reused is False
        assert second.invite_token != first.invite_token

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        inviter_id = UserId(uuid4())

        tokens = set()
        for i in range(20):
            invite, _ = await invite_service.issue(inviter_id, f"user{i}@example.com")
            tokens.add(invite.invite_token.root)

        assert len(tokens) == 20


class TestTrackClick:
    """Tests for track_click."""

    @pytest.mark.asyncio
    async def test_sent_moves_to_clicked(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite, _ = await invite_service.issue(UserId(uuid4()), "bob@example.com")

        tracked = await invite_service.track_click(invite.invite_token)

        assert tracked.status == InviteStatus.CLICKED
        assert tracked.clicked_at is not None

    @pytest.mark.asyncio
    async def test_second_click_keeps_first_timestamp(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite, _ = await invite_service.issue(UserId(uuid4()), "bob@example.com")
        first = await invite_service.track_click(invite.invite_token)

        second = await invite_service.track_click(invite.invite_token)

        assert second.status == InviteStatus.CLICKED
        assert second.clicked_at == first.clicked_at

    @pytest.mark.asyncio
    async def test_click_after_sign_up_does_not_regress(self, unit_env):
        """A signed_up invite stays signed_up when its link is opened again."""
        invite_service = await unit_env.get(InviteService)
        invite, _ = await invite_service.issue(UserId(uuid4()), "bob@example.com")
        await invite_service.redeem(invite, UserId(uuid4()), "bob@example.com", None)

        tracked = await invite_service.track_click(invite.invite_token)

        assert tracked.status == InviteStatus.SIGNED_UP

    @pytest.mark.asyncio
    async def test_unknown_token_returns_none(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        assert await invite_service.track_click(InviteToken("missing")) is None


class TestRedeem:
    """Tests for redeem."""

    @pytest.mark.asyncio
    async def test_redeem_once(self, unit_env):
        """Only the first redeem succeeds; the second leaves the invite alone."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        invite, _ = await invite_service.issue(UserId(uuid4()), "bob@example.com")
        bob_id, mallory_id = UserId(uuid4()), UserId(uuid4())

        # Act
        first = await invite_service.redeem(invite, bob_id, "bob@example.com", "So1")
        second = await invite_service.redeem(invite, mallory_id, "x@example.com", None)

        # Assert
        assert first is True
        assert second is False
        stored = await invite_repo.find_by_id(invite.id)
        assert stored.status == InviteStatus.SIGNED_UP
        assert stored.invited_user_id == bob_id
        assert stored.claimed_wallet_address == "So1"
        # Redeeming without a click fills clicked_at too
        assert stored.clicked_at is not None

    @pytest.mark.asyncio
    async def test_list_personal_newest_first(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        inviter_id = UserId(uuid4())
        base = datetime(2025, 6, 1, tzinfo=timezone.utc)
        for day, email in enumerate(("a@example.com", "b@example.com", "c@example.com")):
            await invite_repo.save(
                Invite(
                    id=InviteId(uuid4()),
                    inviter_id=inviter_id,
                    email=email,
                    invite_token=InviteToken(f"token-{uuid4()}"),
                    is_personal=True,
                    status=InviteStatus.SENT,
                    sent_at=base + timedelta(days=day),
                )
            )

        invites = await invite_service.list_personal(inviter_id)

        assert [i.email for i in invites] == [
            "c@example.com",
            "b@example.com",
            "a@example.com",
        ]
