"""Persistence for user accounts: lookups, inserts and field updates over the users table."""

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, defer

from app.models import User

logger = logging.getLogger(__name__)

# Columns with a unique index, in the order they are reported on a violation.
UNIQUE_FIELDS = ("email", "user_name")


class DuplicateKeyError(Exception):
    """Raised when a write is rejected by a unique index (email or user_name)."""

    def __init__(self, field: str | None, message: str | None = None) -> None:
        self.field = field
        self.message = message or f"Duplicate value for {field or 'a unique field'}"
        super().__init__(self.message)


def _violated_field(error: IntegrityError) -> str | None:
    """Best-effort name of the unique column from the driver's error text."""
    # SQLite: "UNIQUE constraint failed: users.email"
    # PostgreSQL: 'violates unique constraint "ix_users_email" ... Key (email)=(...)'
    detail = str(error.orig).lower()
    for field in UNIQUE_FIELDS:
        if any(p in detail for p in (f"users.{field}", f"ix_users_{field}", f"({field})")):
            return field
    return None


class UserStore:
    """
    Reads and writes User rows through one Session.

    Reads skip soft-deleted rows unless asked, and never load the password hash
    unless include_password is set.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _query(self, include_deleted: bool = False, include_password: bool = False) -> Query:
        query = self.session.query(User)
        if not include_password:
            query = query.options(defer(User.password_hash))
        if not include_deleted:
            query = query.filter(User.is_deleted.is_(False))
        return query

    def find_by_login_credential(self, value: str, include_password: bool = False) -> User | None:
        """Active user whose email, user_name or phone equals value."""
        return (
            self._query(include_password=include_password)
            .filter(or_(User.email == value, User.user_name == value, User.phone == value))
            .order_by(User.created_at, User.id)
            .first()
        )

    def find_by_id(
        self,
        user_id: str,
        include_deleted: bool = False,
        include_password: bool = False,
    ) -> User | None:
        return (
            self._query(include_deleted=include_deleted, include_password=include_password)
            .filter(User.id == user_id)
            .first()
        )

    def find_by_email_or_username(self, email: str, user_name: str) -> User | None:
        """Any user, soft-deleted or not, holding this email or user_name."""
        return (
            self._query(include_deleted=True)
            .filter(or_(User.email == email, User.user_name == user_name))
            .first()
        )

    def list_active(self) -> list[User]:
        return self._query().order_by(User.created_at, User.id).all()

    def create(self, **fields: Any) -> User:
        """Insert a new user. Raises DuplicateKeyError if email or user_name is taken."""
        user = User(**fields)
        self.session.add(user)
        self._commit()
        return user

    def save(self, user: User) -> User:
        """Persist changes made to a loaded user. Raises DuplicateKeyError on a unique violation."""
        self.session.add(user)
        self._commit()
        return user

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            field = _violated_field(e)
            logger.info("Write rejected by unique index", extra={"field": field})
            raise DuplicateKeyError(field) from e
