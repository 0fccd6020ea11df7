"""Onboard user use case."""

from pydantic import BaseModel

from haven.domain.error import ValidationError
from haven.domain.service import UserService
from haven.domain.value import DisplayCurrency, FinancialKnowledgeLevel, RiskLevel


class OnboardUserRequest(BaseModel):
    """Onboard user request.

    Enum fields arrive as raw strings and are validated by the use case.
    """

    identity_id: str | None
    first_name: str | None = None
    last_name: str | None = None
    country: str | None = None
    display_currency: str | None = None
    financial_knowledge_level: str | None = None
    risk_level: str | None = None


class OnboardUserResponse(BaseModel):
    """Onboard user response."""

    ok: bool = True
    user_id: str
    full_name: str | None
    is_onboarded: bool


def _parse(enum_cls, value: str | None, field: str):
    if not value:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value}")


class OnboardUserUseCase:
    """Use case for completing a user's profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize onboard user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: OnboardUserRequest) -> OnboardUserResponse:
        """Execute onboard flow.

        Raises:
            ValidationError: If a name is missing or an enum value is unknown
        """
        caller = await self.user_service.get_caller(request.identity_id)

        first_name = (request.first_name or "").strip()
        last_name = (request.last_name or "").strip()
        if not first_name or not last_name:
            raise ValidationError("first_name and last_name are required")

        user = await self.user_service.onboard(
            caller.id,
            first_name=first_name,
            last_name=last_name,
            country=request.country,
            display_currency=_parse(
                DisplayCurrency,
                request.display_currency.upper() if request.display_currency else None,
                "display_currency",
            ),
            financial_knowledge_level=_parse(
                FinancialKnowledgeLevel,
                request.financial_knowledge_level,
                "financial_knowledge_level",
            ),
            risk_level=_parse(RiskLevel, request.risk_level, "risk_level"),
        )

        return OnboardUserResponse(
            user_id=str(user.id),
            full_name=user.full_name,
            is_onboarded=user.is_onboarded,
        )
