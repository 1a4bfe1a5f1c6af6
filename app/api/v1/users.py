"""User account endpoints: register, login, list, fetch, update, soft-delete, change password."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.auth import get_account_service, get_current_user, require_admin
from app.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
)
from app.schemas.common import MessageResponse
from app.schemas.users import UpdateUserRequest, UserResponse, UsersListResponse
from app.services.accounts import AccountService

router = APIRouter()

Accounts = Annotated[AccountService, Depends(get_account_service)]


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_user(body: RegisterRequest, accounts: Accounts) -> AuthResponse:
    """
    Register a new user and return its details with a JWT access token.

    Fails with 400 when the email or username is already taken, including by a
    deleted account.
    """
    result = accounts.register(body)
    return AuthResponse(
        message="User registered successfully",
        user=result.user,
        token=result.token,
    )


@router.post("/login", response_model=AuthResponse)
def login_user(body: LoginRequest, accounts: Accounts) -> AuthResponse:
    """
    Authenticate with email, username or phone plus password.
    Include the returned token in the Authorization header as: Bearer <token>
    """
    result = accounts.login(body.login_cred, body.password)
    return AuthResponse(
        message="Logged in successfully",
        user=result.user,
        token=result.token,
    )


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    accounts: Accounts,
) -> UsersListResponse:
    """List all active users (admin only)."""
    users = accounts.list_users()
    return UsersListResponse(count=len(users), data=users)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    accounts: Accounts,
) -> UserResponse:
    return UserResponse(data=accounts.get_user(user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    body: UpdateUserRequest,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    accounts: Accounts,
) -> UserResponse:
    """Update name, email, phone or photoURL. Empty values leave the stored value as is."""
    return UserResponse(data=accounts.update_user(user_id, body))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    accounts: Accounts,
) -> MessageResponse:
    """Soft-delete a user (admin only)."""
    accounts.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")


@router.put("/{user_id}/change-password", response_model=MessageResponse)
def change_password(
    user_id: str,
    body: ChangePasswordRequest,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    accounts: Accounts,
) -> MessageResponse:
    accounts.change_password(user_id, body.current_password, body.new_password)
    return MessageResponse(message="Password changed successfully")
