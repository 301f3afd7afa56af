"""
Credential validators for registration and login payloads.

Rules run in a fixed order and the first failing rule wins; the raised
``ValidationError`` carries a message fit to show the user.
"""

from __future__ import annotations

import re

from utils.errors import ValidationError
from utils.schemas import LoginRequest, RegisterRequest

_USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
_EMAIL_RE = re.compile(r"^\S+@\S+$")


def validate_register_request(req: RegisterRequest) -> None:
    """Check name → username → email → password."""
    validate_name(req.name)
    validate_username(req.username)
    validate_email(req.email)
    validate_password(req.password)


def validate_login_request(req: LoginRequest) -> None:
    if not req.username.strip():
        raise ValidationError("username is required")
    if not req.password.strip():
        raise ValidationError("password is required")
    if len(req.username) < 3:
        raise ValidationError("username must be at least 3 characters long")
    if len(req.password) < 6:
        raise ValidationError("password must be at least 6 characters long")


def validate_name(name: str) -> None:
    name = name.strip()
    if not name:
        raise ValidationError("name is required")
    if len(name) < 2:
        raise ValidationError("name must be at least 2 characters long")
    if len(name) > 50:
        raise ValidationError("name must be no more than 50 characters long")


def validate_username(username: str) -> None:
    username = username.strip()
    if not username:
        raise ValidationError("username is required")
    if len(username) < 3:
        raise ValidationError("username must be at least 3 characters long")
    if len(username) > 30:
        raise ValidationError("username must be no more than 30 characters long")
    if not _USERNAME_RE.match(username):
        raise ValidationError(
            "username can only contain letters, numbers, and underscores"
        )


def validate_email(email: str) -> None:
    email = email.strip()
    if not email:
        raise ValidationError("email is required")
    if not _EMAIL_RE.match(email):
        raise ValidationError("invalid email")
    if len(email) > 100:
        raise ValidationError("email must be no more than 100 characters long")


def validate_password(password: str) -> None:
    # Not trimmed: whitespace is a legitimate password character.
    if not password:
        raise ValidationError("password is required")
    if len(password) < 6:
        raise ValidationError("password must be at least 6 characters long")
    if len(password) > 100:
        raise ValidationError("password must be no more than 100 characters long")
