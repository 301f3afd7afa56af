"""
Auth workflow — register, login, profile.

Orchestrates validators → user directory → password hashing → token issuer.
The HTTP layer only translates requests and responses; every decision about
which error a caller sees is made here.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Tuple

from auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from auth.tokens import TokenIssuer
from database.models import User
from database.user_repository import UserDirectory, parse_user_id
from utils.errors import (
    ConflictError,
    HashingError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
    StorageError,
)
from utils.schemas import LoginRequest, RegisterRequest
from utils.validators import validate_login_request, validate_register_request

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        directory: UserDirectory,
        tokens: TokenIssuer,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        self._directory = directory
        self._tokens = tokens
        self._bcrypt_rounds = bcrypt_rounds

    async def register(self, req: RegisterRequest) -> Tuple[User, str]:
        """
        Create a new identity and sign a token for it.

        The existence checks only exit early; the store's unique indexes
        still decide, and a lost race surfaces as ``ConflictError`` from
        ``create``.
        """
        validate_register_request(req)
        name = req.name.strip()
        username = req.username.strip()
        email = req.email.strip()

        try:
            if await self._directory.email_exists(email):
                raise ConflictError.email_exists()
            if await self._directory.username_exists(username):
                raise ConflictError.username_exists()
        except StorageError as exc:
            raise InternalError("Failed to create account") from exc

        try:
            password_hash = await asyncio.to_thread(
                hash_password, req.password, self._bcrypt_rounds
            )
        except HashingError as exc:
            logger.exception("Password hashing failed")
            raise InternalError("Failed to create account") from exc

        user = User(
            name=name,
            username=username,
            email=email,
            password_hash=password_hash,
        )
        try:
            user = await self._directory.create(user)
        except StorageError as exc:
            raise InternalError("Failed to create account") from exc

        token = self._tokens.issue(str(user.id))
        logger.info("Registered user %s (%s)", user.username, user.id)
        return user, token

    async def login(self, req: LoginRequest) -> Tuple[User, str]:
        validate_login_request(req)

        try:
            user = await self._directory.get_by_username(req.username.strip())
        except (NotFoundError, StorageError):
            logger.info("Login rejected for %r", req.username)
            raise InvalidCredentialsError() from None

        ok = await asyncio.to_thread(verify_password, req.password, user.password_hash)
        if not ok:
            logger.info("Login rejected for %r", req.username)
            raise InvalidCredentialsError()

        token = self._tokens.issue(str(user.id))
        logger.info("Login: %s (%s)", user.username, user.id)
        return user, token

    async def get_profile(self, user_id: str) -> User:
        """Raises ``InvalidIDError`` or ``NotFoundError``."""
        uid = parse_user_id(user_id)
        try:
            return await self._directory.get_by_id(uid)
        except StorageError as exc:
            raise InternalError("Failed to retrieve profile") from exc
