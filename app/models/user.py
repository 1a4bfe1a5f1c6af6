"""ORM model for user accounts (auth, RBAC and soft-delete)."""

import uuid
from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, String, func

from app.models.base import Base


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


def _new_user_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    password_hash is None for accounts created through an external identity provider.
    Rows are never physically deleted; is_deleted marks a removed account.
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_user_id)
    name = Column(String(255), nullable=False)
    user_name = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True, index=True)
    photo_url = Column(String(2048), nullable=True)
    role = Column(String(32), nullable=False, default=UserRole.user.value)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
