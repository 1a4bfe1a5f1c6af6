"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
)
from app.schemas.common import ErrorResponse, FieldError, MessageResponse
from app.schemas.health import HealthResponse
from app.schemas.users import (
    UpdateUserRequest,
    UserDetails,
    UserResponse,
    UsersListResponse,
)

__all__ = [
    "AuthResponse",
    "ChangePasswordRequest",
    "CurrentUser",
    "ErrorResponse",
    "FieldError",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "UpdateUserRequest",
    "UserDetails",
    "UserResponse",
    "UsersListResponse",
]
