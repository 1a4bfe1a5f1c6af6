"""Typed account errors; each carries the HTTP status it is reported with."""


class AccountError(Exception):
    """Base class for errors that map to a failure response."""

    status_code = 500

    def __init__(self, message: str, headers: dict[str, str] | None = None) -> None:
        self.message = message
        self.headers = headers
        super().__init__(message)


class ValidationFailedError(AccountError):
    """Request is missing required fields or has malformed values."""

    status_code = 400

    def __init__(self, message: str, errors: list[dict[str, str]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ConflictError(AccountError):
    """Email or username already in use."""

    status_code = 400


class UnauthorizedError(AccountError):
    """Bad credentials, or a missing, invalid or expired token."""

    status_code = 401

    def __init__(self, message: str) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(AccountError):
    status_code = 403


class NotFoundError(AccountError):
    """Record is missing or soft-deleted."""

    status_code = 404
