"""Pydantic request/response schemas."""

from app.schemas.auth import CurrentUser, LoginRequest, LoginResponse
from app.schemas.health import HealthResponse
from app.schemas.users import (
    MessageResponse,
    Role,
    UserCreate,
    UserCreatedResponse,
    UserPublic,
    UserUpdate,
    UserUpdatedResponse,
)

__all__ = [
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "Role",
    "UserCreate",
    "UserCreatedResponse",
    "UserPublic",
    "UserUpdate",
    "UserUpdatedResponse",
]
