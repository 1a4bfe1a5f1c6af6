"""Unit tests for app.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.security import InvalidTokenError, PasswordHasher, TokenService

SECRET = "unit-test-secret"


class TestPasswordHasher(unittest.TestCase):
    """PasswordHasher salts every hash and verifies with bcrypt."""

    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_differs_per_call_but_both_verify(self) -> None:
        first = self.hasher.hash("s3cret-pass")
        second = self.hasher.hash("s3cret-pass")
        self.assertNotEqual(first, second)
        self.assertTrue(self.hasher.verify("s3cret-pass", first))
        self.assertTrue(self.hasher.verify("s3cret-pass", second))

    def test_hash_is_not_plaintext(self) -> None:
        hashed = self.hasher.hash("s3cret-pass")
        self.assertNotIn("s3cret-pass", hashed)
        self.assertTrue(hashed.startswith("$2"))

    def test_wrong_password_fails(self) -> None:
        hashed = self.hasher.hash("s3cret-pass")
        self.assertFalse(self.hasher.verify("other-pass", hashed))

    def test_missing_or_malformed_hash_returns_false(self) -> None:
        self.assertFalse(self.hasher.verify("s3cret-pass", None))
        self.assertFalse(self.hasher.verify("s3cret-pass", ""))
        self.assertFalse(self.hasher.verify("s3cret-pass", "not-a-bcrypt-hash"))

    def test_configured_rounds_are_used(self) -> None:
        hashed = PasswordHasher(rounds=5).hash("s3cret-pass")
        self.assertEqual(hashed.split("$")[2], "05")


class TestTokenService(unittest.TestCase):
    """TokenService embeds the user id as sub and rejects tampered or expired tokens."""

    def setUp(self) -> None:
        self.tokens = TokenService(secret=SECRET, algorithm="HS256", expire_minutes=1440)

    def test_issue_then_verify_returns_user_id(self) -> None:
        token = self.tokens.issue("abc123")
        self.assertEqual(self.tokens.verify(token), "abc123")

    def test_expiry_is_one_day(self) -> None:
        token = self.tokens.issue("abc123")
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        self.assertEqual(payload["exp"] - payload["iat"], 24 * 60 * 60)

    def test_wrong_secret_is_rejected(self) -> None:
        token = TokenService(secret="another-secret").issue("abc123")
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token)

    def test_malformed_token_is_rejected(self) -> None:
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify("not.a.jwt")

    def test_expired_token_is_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(days=2)
        token = jwt.encode(
            {"sub": "abc123", "iat": past, "exp": past + timedelta(days=1)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError) as ctx:
            self.tokens.verify(token)
        self.assertIn("expired", ctx.exception.message)

    def test_token_without_sub_is_rejected(self) -> None:
        token = jwt.encode(
            {"exp": datetime.now(UTC) + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token)


if __name__ == "__main__":
    unittest.main()
