"""Account use cases: register, login, list, fetch, update, soft-delete and change password."""

import logging
from dataclasses import dataclass

from app.core.errors import ConflictError, NotFoundError, UnauthorizedError
from app.core.security import PasswordHasher, TokenService
from app.models import User
from app.schemas.auth import RegisterRequest
from app.schemas.users import UpdateUserRequest, UserDetails
from app.services.user_store import DuplicateKeyError, UserStore

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "User already exists with this email"
USERNAME_TAKEN = "Username is already taken"
EMAIL_IN_USE = "Email is already in use"
USER_NOT_FOUND = "User not found"


@dataclass
class AuthResult:
    user: UserDetails
    token: str


def to_user_details(user: User) -> UserDetails:
    """Project a user onto the fixed set of public fields."""
    return UserDetails(
        id=user.id,
        name=user.name,
        user_name=user.user_name,
        email=user.email,
        photo_url=user.photo_url,
        phone=user.phone,
        role=user.role,
        is_deleted=user.is_deleted,
    )


def _conflict_for(error: DuplicateKeyError) -> ConflictError:
    if error.field == "user_name":
        return ConflictError(USERNAME_TAKEN)
    if error.field == "email":
        return ConflictError(EMAIL_TAKEN)
    return ConflictError(error.message)


class AccountService:
    """Orchestrates the user store, password hasher and token service for each request."""

    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenService) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def _get_active(self, user_id: str, include_password: bool = False) -> User:
        user = self.store.find_by_id(user_id, include_password=include_password)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)
        return user

    def register(self, body: RegisterRequest) -> AuthResult:
        """
        Create an account and return its details with a fresh token.

        Emails and usernames stay reserved after a soft-delete, so the lookup
        covers deleted rows as well.
        """
        existing = self.store.find_by_email_or_username(body.email, body.user_name)
        if existing is not None:
            if existing.email == body.email:
                raise ConflictError(EMAIL_TAKEN)
            raise ConflictError(USERNAME_TAKEN)

        try:
            user = self.store.create(
                name=body.name,
                user_name=body.user_name,
                email=body.email,
                password_hash=self.hasher.hash(body.password),
                phone=body.phone or None,
            )
        except DuplicateKeyError as e:
            # Lost a race with a concurrent registration.
            raise _conflict_for(e) from e

        logger.info("User registered", extra={"user_id": user.id})
        return AuthResult(user=to_user_details(user), token=self.tokens.issue(user.id))

    def login(self, login_cred: str, password: str) -> AuthResult:
        """Authenticate by email, username or phone."""
        user = self.store.find_by_login_credential(login_cred, include_password=True)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)
        if not user.password_hash:
            raise UnauthorizedError("Please login with Google")
        if not self.hasher.verify(password, user.password_hash):
            logger.warning("Login failed: password mismatch", extra={"user_id": user.id})
            raise UnauthorizedError("Invalid credentials")

        logger.info("User logged in", extra={"user_id": user.id})
        return AuthResult(user=to_user_details(user), token=self.tokens.issue(user.id))

    def list_users(self) -> list[UserDetails]:
        return [to_user_details(u) for u in self.store.list_active()]

    def get_user(self, user_id: str) -> UserDetails:
        return to_user_details(self._get_active(user_id))

    def update_user(self, user_id: str, changes: UpdateUserRequest) -> UserDetails:
        """Overwrite profile fields with the provided values; empty values keep what is stored."""
        user = self._get_active(user_id)
        user.name = changes.name or user.name
        user.email = changes.email or user.email
        user.phone = changes.phone or user.phone
        user.photo_url = changes.photo_url or user.photo_url
        try:
            self.store.save(user)
        except DuplicateKeyError as e:
            # email is the only unique column an update can touch
            raise ConflictError(EMAIL_IN_USE) from e
        return to_user_details(user)

    def delete_user(self, user_id: str) -> None:
        """Soft-delete: the row stays, flagged as deleted."""
        user = self._get_active(user_id)
        user.is_deleted = True
        self.store.save(user)
        logger.info("User soft-deleted", extra={"user_id": user_id})

    def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        user = self._get_active(user_id, include_password=True)
        if not self.hasher.verify(current_password, user.password_hash):
            logger.warning("Password change rejected", extra={"user_id": user_id})
            raise UnauthorizedError("Current password is incorrect")
        user.password_hash = self.hasher.hash(new_password)
        self.store.save(user)
        logger.info("Password changed", extra={"user_id": user_id})
