"""Unit tests for IssuePersonalInviteUseCase."""

from urllib.parse import quote

import pytest

from haven.application.usecase.invite import (
    IssuePersonalInviteRequest,
    IssuePersonalInviteUseCase,
)
from haven.domain.error import ValidationError
from haven.domain.repository import ContactRepository, InviteRepository, UserRepository
from haven.domain.value import ContactStatus, InviteStatus
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestIssuePersonalInvite:
    """Tests for IssuePersonalInviteUseCase."""

    @pytest.mark.asyncio
    async def test_issue_returns_link_and_records_invited_contact(self, unit_env):
        # Arrange
        use_case = await unit_env.get(IssuePersonalInviteUseCase)
        user_repo = await unit_env.get(UserRepository)
        contact_repo = await unit_env.get(ContactRepository)
        alice = await make_user(
            user_repo, "alice@example.com", identity_id="did:privy:alice"
        )

        # Act
        response = await use_case.execute(
            IssuePersonalInviteRequest(
                identity_id="did:privy:alice",
                email=" Bob@Example.com ",
                recipient_name="Bob",
            )
        )

        # Assert
        assert response.ok is True
        assert response.reused is False
        assert response.invite.email == "bob@example.com"
        assert response.invite.status == InviteStatus.SENT
        token = response.invite.invite_token
        assert response.path == f"/sign-in?invite={quote(token)}"
        assert response.link.endswith(response.path)

        contacts = await contact_repo.find_by_owner(alice.id)
        assert len(contacts) == 1
        assert contacts[0].status == ContactStatus.INVITED
        assert contacts[0].name == "Bob"
        assert contacts[0].invited_at == response.invite.sent_at

    @pytest.mark.asyncio
    async def test_issue_twice_reuses_token(self, unit_env):
        """Re-issuing to the same email returns the same token and no new invite."""
        use_case = await unit_env.get(IssuePersonalInviteUseCase)
        user_repo = await unit_env.get(UserRepository)
        invite_repo = await unit_env.get(InviteRepository)
        alice = await make_user(
            user_repo, "alice@example.com", identity_id="did:privy:alice"
        )
        request = IssuePersonalInviteRequest(
            identity_id="did:privy:alice", email="bob@example.com"
        )

        first = await use_case.execute(request)
        second = await use_case.execute(request)

        assert second.reused is True
        assert second.invite.invite_token == first.invite.invite_token
        assert len(await invite_repo.find_by_inviter(alice.id)) == 1

    @pytest.mark.asyncio
    async def test_existing_user_is_already_on_haven(self, unit_env):
        """Inviting a Haven user creates no invite and adds an active contact."""
        # Arrange
        use_case = await unit_env.get(IssuePersonalInviteUseCase)
        user_repo = await unit_env.get(UserRepository)
        invite_repo = await unit_env.get(InviteRepository)
        contact_repo = await unit_env.get(ContactRepository)
        alice = await make_user(
            user_repo, "alice@example.com", identity_id="did:privy:alice"
        )
        bob = await make_user(user_repo, "bob@example.com", wallet_address="So1anaBob")

        # Act
        response = await use_case.execute(
            IssuePersonalInviteRequest(
                identity_id="did:privy:alice", email="bob@example.com"
            )
        )

        # Assert
        assert response.ok is False
        assert response.reason == "already_on_haven"
        assert response.invite is None
        assert await invite_repo.find_by_inviter(alice.id) == []
        contacts = await contact_repo.find_by_owner(alice.id)
        assert contacts[0].status == ContactStatus.ACTIVE
        assert contacts[0].haven_user_id == bob.id
        assert contacts[0].wallet_address == "So1anaBob"

    @pytest.mark.asyncio
    async def test_self_invite_adds_no_contact(self, unit_env):
        use_case = await unit_env.get(IssuePersonalInviteUseCase)
        user_repo = await unit_env.get(UserRepository)
        contact_repo = await unit_env.get(ContactRepository)
        alice = await make_user(
            user_repo, "alice@example.com", identity_id="did:privy:alice"
        )

        response = await use_case.execute(
            IssuePersonalInviteRequest(
                identity_id="did:privy:alice", email="alice@example.com"
            )
        )

        assert response.reason == "already_on_haven"
        assert await contact_repo.find_by_owner(alice.id) == []

    @pytest.mark.asyncio
    async def test_invalid_email_is_rejected(self, unit_env):
        use_case = await unit_env.get(IssuePersonalInviteUseCase)
        user_repo = await unit_env.get(UserRepository)
        await make_user(user_repo, "alice@example.com", identity_id="did:privy:alice")

        with pytest.raises(ValidationError):
            await use_case.execute(
                IssuePersonalInviteRequest(identity_id="did:privy:alice", email="bob")
            )
