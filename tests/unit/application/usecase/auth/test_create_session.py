"""Unit tests for CreateSessionUseCase."""

import pytest

from haven.adapter.error import IdentityProviderError
from haven.application.usecase.auth import CreateSessionRequest, CreateSessionUseCase
from haven.domain.error import DuplicateRecordError, ValidationError
from haven.domain.repository import UserRepository
from haven.domain.service import JWTService
from haven.domain.value import PENDING_WALLET
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateSession:
    """Tests for CreateSessionUseCase."""

    @pytest.mark.asyncio
    async def test_first_sign_in_creates_user(self, unit_env):
        """A new identity creates a user with a referral code."""
        # Arrange
        use_case = await unit_env.get(CreateSessionUseCase)
        jwt_service = await unit_env.get(JWTService)

        # Act
        response = await use_case.execute(
            CreateSessionRequest(access_token="did:privy:bob|bob@example.com|So1anaBob")
        )

        # Assert
        assert response.ok is True
        assert response.is_new_user is True
        assert response.user.email == "bob@example.com"
        assert response.user.wallet_address == "So1anaBob"
        assert response.user.referral_code.startswith("HVN_")
        assert jwt_service.get_identity_from_token(response.session_token) == (
            "did:privy:bob"
        )

    @pytest.mark.asyncio
    async def test_returning_user_is_not_new(self, unit_env):
        use_case = await unit_env.get(CreateSessionUseCase)
        first = await use_case.execute(
            CreateSessionRequest(access_token="did:privy:bob|bob@example.com")
        )

        second = await use_case.execute(
            CreateSessionRequest(access_token="did:privy:bob|bob@example.com")
        )

        assert second.is_new_user is False
        assert second.user.id == first.user.id
        assert second.user.referral_code == first.user.referral_code

    @pytest.mark.asyncio
    async def test_body_email_and_wallet_take_precedence(self, unit_env):
        use_case = await unit_env.get(CreateSessionUseCase)

        response = await use_case.execute(
            CreateSessionRequest(
                access_token="did:privy:bob|provider@example.com|So1anaProvider",
                email="Bob@Example.com",
                solana_address="So1anaBody",
            )
        )

        assert response.user.email == "bob@example.com"
        assert response.user.wallet_address == "So1anaBody"

    @pytest.mark.asyncio
    async def test_missing_email_gets_placeholder(self, unit_env):
        use_case = await unit_env.get(CreateSessionUseCase)

        response = await use_case.execute(
            CreateSessionRequest(access_token="did:privy:nomail")
        )

        assert response.user.email == "did_privy_nomail@user.haven.local"
        assert response.user.wallet_address == PENDING_WALLET

    @pytest.mark.asyncio
    async def test_returning_user_keeps_stored_email_and_wallet(self, unit_env):
        use_case = await unit_env.get(CreateSessionUseCase)
        await use_case.execute(
            CreateSessionRequest(access_token="did:privy:bob|bob@example.com|So1anaBob")
        )

        response = await use_case.execute(
            CreateSessionRequest(access_token="did:privy:bob")
        )

        assert response.user.email == "bob@example.com"
        assert response.user.wallet_address == "So1anaBob"

    @pytest.mark.asyncio
    async def test_email_held_by_other_user_conflicts(self, unit_env):
        use_case = await unit_env.get(CreateSessionUseCase)
        user_repo = await unit_env.get(UserRepository)
        await make_user(user_repo, "bob@example.com", identity_id="did:privy:bob")

        with pytest.raises(DuplicateRecordError):
            await use_case.execute(
                CreateSessionRequest(access_token="did:privy:imposter|bob@example.com")
            )

    @pytest.mark.asyncio
    async def test_blank_token_is_rejected(self, unit_env):
        use_case = await unit_env.get(CreateSessionUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(CreateSessionRequest(access_token="  "))

    @pytest.mark.asyncio
    async def test_invalid_token_is_rejected(self, unit_env):
        use_case = await unit_env.get(CreateSessionUseCase)

        with pytest.raises(IdentityProviderError):
            await use_case.execute(CreateSessionRequest(access_token="invalid-token"))
