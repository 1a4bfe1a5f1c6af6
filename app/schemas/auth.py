"""Request/response schemas for registration, login and password changes."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.users import UserDetails, number_to_text

# Identifiers are trimmed before length checks; passwords are taken as sent.
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class RegisterRequest(BaseModel):
    """New account fields."""

    model_config = ConfigDict(populate_by_name=True)

    name: RequiredText = Field(..., description="Display name")
    user_name: RequiredText = Field(..., alias="userName", description="Unique handle")
    email: RequiredText = Field(..., description="Email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )
    phone: Annotated[str, StringConstraints(strip_whitespace=True, max_length=32)] | None = Field(
        default=None, description="Phone number"
    )

    @field_validator("phone", mode="before")
    @classmethod
    def phone_as_text(cls, v: Any) -> Any:
        return number_to_text(v)


class LoginRequest(BaseModel):
    """Credentials for login: email, username or phone plus password."""

    model_config = ConfigDict(populate_by_name=True)

    login_cred: RequiredText = Field(
        ..., alias="loginCred", description="Email, username or phone"
    )
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(
        ..., min_length=1, max_length=PASSWORD_MAX_LEN, alias="currentPassword"
    )
    new_password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        alias="newPassword",
    )


class AuthResponse(BaseModel):
    """User details and JWT access token returned after register or login."""

    success: bool = True
    message: str
    user: UserDetails
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")


class CurrentUser(BaseModel):
    """Authenticated user (id, username, role) for dependency injection."""

    id: str
    user_name: str
    role: str
