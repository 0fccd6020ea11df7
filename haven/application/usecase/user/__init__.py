"""User use cases."""

from haven.application.usecase.user.onboard_user import (
    OnboardUserRequest,
    OnboardUserResponse,
    OnboardUserUseCase,
)

__all__ = [
    "OnboardUserRequest",
    "OnboardUserResponse",
    "OnboardUserUseCase",
]
