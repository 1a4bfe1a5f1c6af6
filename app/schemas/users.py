"""Request/response schemas for user profile endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.user import UserRole


def number_to_text(value: Any) -> Any:
    """Accept a phone sent as a JSON number by casting it to its string form."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class UserDetails(BaseModel):
    """Public projection of a user. The password hash is not part of it."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    user_name: str = Field(..., alias="userName")
    email: str
    photo_url: str | None = Field(default=None, alias="photoURL")
    phone: str | None = None
    role: UserRole = UserRole.user
    is_deleted: bool = Field(default=False, alias="isDeleted")


class UpdateUserRequest(BaseModel):
    """Profile fields to overwrite; empty or missing values keep the current value."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=32)
    photo_url: str | None = Field(default=None, max_length=2048, alias="photoURL")

    @field_validator("name", "email", "phone", "photo_url", mode="before")
    @classmethod
    def drop_falsy(cls, v: Any) -> Any:
        # 0, false, "" and null all mean "leave unchanged"
        if not v:
            return None
        return number_to_text(v)


class UserResponse(BaseModel):
    """Single user wrapped in the success envelope."""

    success: bool = True
    data: UserDetails


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    success: bool = True
    count: int
    data: list[UserDetails]
