"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

# bcrypt only looks at the first 72 bytes of the input.
BCRYPT_MAX_BYTES = 72

# Min/max lengths for password validation.
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


class InvalidTokenError(Exception):
    """Raised when a token is malformed, expired, badly signed, or missing claims."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PasswordHasher:
    """Salted bcrypt hashing with a configurable cost."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed: str | None) -> bool:
        """Verify a plain password against a stored hash; False for a missing or broken hash."""
        if not hashed:
            return False
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


class TokenService:
    """Issue and verify signed access tokens that carry a user id as `sub`."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 1440) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: str) -> str:
        """Create a JWT access token with sub, iat and exp."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Decode and validate a token; return the user id it was issued for.
        Raises InvalidTokenError on invalid or expired token.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError("Invalid token") from e
        sub = payload.get("sub")
        if not sub or not isinstance(sub, str):
            raise InvalidTokenError("Invalid token payload")
        return sub
