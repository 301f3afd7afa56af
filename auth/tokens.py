"""
Session token creation and verification.

Tokens are HS256-signed JWTs carrying ``user_id``, ``iat`` and ``exp``.
The secret comes from ``Settings.jwt_secret`` and is handed to
``TokenIssuer`` once at startup.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from utils.errors import ConfigurationError, TokenError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_LIFETIME = timedelta(hours=24)


class TokenIssuer:
    """Signs and verifies time-bounded session tokens."""

    def __init__(self, secret: str, lifetime: timedelta = DEFAULT_LIFETIME) -> None:
        if not secret:
            raise ConfigurationError("Token signing secret must not be empty")
        self._secret = secret
        self._lifetime = lifetime

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Create a signed token for ``user_id`` valid for the configured lifetime."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "user_id": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._lifetime).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> str:
        """
        Verify ``token`` and return its ``user_id``.

        Raises ``TokenError`` with ``expired=True`` when the signature is
        fine but the token is past its expiry, and ``expired=False`` for
        anything malformed or badly signed.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenError("Token has expired", expired=True) from exc
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected token: %s", exc)
            raise TokenError("Invalid token") from exc

        user_id = payload.get("user_id")
        if not isinstance(user_id, str) or not user_id:
            raise TokenError("Invalid token")
        return user_id
