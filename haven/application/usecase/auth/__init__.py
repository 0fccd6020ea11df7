"""Auth use cases."""

from haven.application.usecase.auth.create_session import (
    CreateSessionRequest,
    CreateSessionResponse,
    CreateSessionUseCase,
)
from haven.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)

__all__ = [
    "CreateSessionRequest",
    "CreateSessionResponse",
    "CreateSessionUseCase",
    "GetCurrentUserRequest",
    "GetCurrentUserResponse",
    "GetCurrentUserUseCase",
]
