"""
Application error taxonomy.

Every failure that can reach the HTTP boundary is an ``AppError`` carrying a
human-readable ``message``, a machine-readable ``code`` and the HTTP status
the exception handlers answer with.
"""

from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base exception for the shop backend."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Client input is malformed."""

    status_code = 400
    code = "VALIDATION_ERROR"


class ConflictError(AppError):
    """A uniqueness constraint would be violated."""

    status_code = 409
    code = "CONFLICT"

    EMAIL_EXISTS = "EMAIL_EXISTS"
    USERNAME_EXISTS = "USERNAME_EXISTS"

    @classmethod
    def email_exists(cls) -> "ConflictError":
        return cls("An account with this email already exists", cls.EMAIL_EXISTS)

    @classmethod
    def username_exists(cls) -> "ConflictError":
        return cls("This username is already taken", cls.USERNAME_EXISTS)


class InvalidCredentialsError(AppError):
    """Login failed. Never says whether the user or the password was wrong."""

    status_code = 401
    code = "INVALID_CREDENTIALS"

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class NotFoundError(AppError):
    status_code = 404
    code = "USER_NOT_FOUND"


class InvalidIDError(AppError):
    status_code = 400
    code = "INVALID_USER_ID"


class TokenError(AppError):
    """Bearer token is missing, malformed, badly signed or expired."""

    status_code = 401
    code = "INVALID_TOKEN"

    def __init__(
        self, message: str, expired: bool = False, code: Optional[str] = None
    ) -> None:
        self.expired = expired
        super().__init__(message, code or ("TOKEN_EXPIRED" if expired else None))


class UpstreamError(AppError):
    """The product catalog service failed or answered garbage."""

    status_code = 502
    code = "UPSTREAM_ERROR"


class InternalError(AppError):
    status_code = 500
    code = "INTERNAL_ERROR"


class HashingError(InternalError):
    """The password hashing primitive failed."""


class StorageError(InternalError):
    """The user store failed for a reason other than a uniqueness violation."""


class ConfigurationError(Exception):
    """Raised at startup when the settings cannot run a server."""
