"""Auth dependencies: service wiring, get_current_user and require_admin."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import ForbiddenError, UnauthorizedError
from app.core.security import InvalidTokenError, PasswordHasher, TokenService
from app.models import UserRole
from app.schemas.auth import CurrentUser
from app.services.accounts import AccountService
from app.services.user_store import UserStore

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)

INVALID_IDENTITY = "Unable to login, invalid credentials"


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)


@lru_cache
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_account_service(
    store: Annotated[UserStore, Depends(get_user_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AccountService:
    return AccountService(store, hasher, tokens)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[UserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the current user. Raises 401 if
    the header is missing, the token is invalid or expired, or the account is gone.

    Soft-deleted accounts are rejected even while their token is still valid.
    The resolved user and raw token are stored on request.state.
    """
    if credentials is None:
        # HTTPBearer also yields None for a header with another scheme or no token
        if request.headers.get("Authorization"):
            raise UnauthorizedError("Invalid or expired token")
        raise UnauthorizedError("Authorization header is missing")
    token = credentials.credentials
    try:
        user_id = tokens.verify(token)
    except InvalidTokenError as e:
        logger.info("Rejected token", extra={"reason": e.message})
        raise UnauthorizedError("Invalid or expired token") from e

    user = store.find_by_id(user_id, include_deleted=True)
    if user is None:
        raise UnauthorizedError(INVALID_IDENTITY)
    if user.is_deleted:
        logger.info("Rejected token for soft-deleted user", extra={"user_id": user.id})
        raise UnauthorizedError(INVALID_IDENTITY)

    request.state.user = user
    request.state.token = token
    return CurrentUser(id=user.id, user_name=user.user_name, role=user.role)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != UserRole.admin.value:
        raise ForbiddenError("You are not authorized!")
    return current_user
