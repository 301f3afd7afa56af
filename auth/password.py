"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic salting and a configurable
work factor.  bcrypt only reads the first 72 bytes of its input, so the
password is first reduced to a fixed-length SHA-256 digest; every character
of a long password still counts.
"""

from __future__ import annotations

import base64
import hashlib

import bcrypt

from utils.errors import HashingError

DEFAULT_ROUNDS = 10


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    try:
        return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=rounds)).decode()
    except (ValueError, TypeError, OSError) as exc:
        raise HashingError("Failed to hash password") from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode())
    except (ValueError, TypeError):
        return False
