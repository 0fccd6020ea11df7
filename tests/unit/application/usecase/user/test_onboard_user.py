"""Unit tests for OnboardUserUseCase."""

import pytest

from haven.application.usecase.user import OnboardUserRequest, OnboardUserUseCase
from haven.domain.error import ValidationError
from haven.domain.repository import UserRepository
from haven.domain.value import DisplayCurrency, FinancialKnowledgeLevel
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestOnboardUser:
    """Tests for OnboardUserUseCase."""

    @pytest.mark.asyncio
    async def test_onboard(self, unit_env):
        use_case = await unit_env.get(OnboardUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        bob = await make_user(user_repo, "bob@example.com", identity_id="did:privy:bob")

        response = await use_case.execute(
            OnboardUserRequest(
                identity_id="did:privy:bob",
                first_name="Bob",
                last_name="Stone",
                display_currency="gbp",
                financial_knowledge_level=FinancialKnowledgeLevel.NONE.value,
            )
        )

        assert response.is_onboarded is True
        assert response.full_name == "Bob Stone"
        stored = await user_repo.find_by_id(bob.id)
        assert stored.display_currency == DisplayCurrency.GBP

    @pytest.mark.asyncio
    async def test_names_required(self, unit_env):
        use_case = await unit_env.get(OnboardUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        await make_user(user_repo, "bob@example.com", identity_id="did:privy:bob")

        with pytest.raises(ValidationError):
            await use_case.execute(
                OnboardUserRequest(identity_id="did:privy:bob", first_name="Bob")
            )

    @pytest.mark.asyncio
    async def test_unknown_risk_level(self, unit_env):
        use_case = await unit_env.get(OnboardUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        await make_user(user_repo, "bob@example.com", identity_id="did:privy:bob")

        with pytest.raises(ValidationError):
            await use_case.execute(
                OnboardUserRequest(
                    identity_id="did:privy:bob",
                    first_name="Bob",
                    last_name="Stone",
                    risk_level="reckless",
                )
            )
