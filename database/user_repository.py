"""
User directory backed by SQLAlchemy.

``UserDirectory`` is the contract the auth service depends on;
``UserRepository`` implements it over an ``AsyncSession``.  The unique
indexes on ``users.email`` and ``users.username`` are the source of truth
for uniqueness: a violation caught at insert time becomes ``ConflictError``.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Union

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User
from utils.errors import ConflictError, InvalidIDError, NotFoundError, StorageError

logger = logging.getLogger(__name__)


class UserDirectory(ABC):
    """Lookup and creation of identities."""

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        ...

    @abstractmethod
    async def username_exists(self, username: str) -> bool:
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Persist ``user`` and return it with its id assigned.

        Raises ``ConflictError`` if the email or username is already taken,
        ``StorageError`` for any other storage failure.
        """
        ...

    @abstractmethod
    async def get_by_username(self, username: str) -> User:
        """Raises ``NotFoundError`` if no such user."""
        ...

    @abstractmethod
    async def get_by_id(self, user_id: Union[str, uuid.UUID]) -> User:
        """Raises ``InvalidIDError`` for a malformed id, ``NotFoundError`` if absent."""
        ...


def parse_user_id(user_id: Union[str, uuid.UUID]) -> uuid.UUID:
    if isinstance(user_id, uuid.UUID):
        return user_id
    try:
        return uuid.UUID(str(user_id))
    except ValueError as exc:
        raise InvalidIDError("Invalid user ID") from exc


class UserRepository(UserDirectory):
    """SQLAlchemy implementation of the UserDirectory interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(User).where(*criteria)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.exception("User lookup failed")
            raise StorageError("Failed to query users") from exc
        return result.scalar_one()

    async def email_exists(self, email: str) -> bool:
        return await self._count(User.email == email) > 0

    async def username_exists(self, username: str) -> bool:
        return await self._count(User.username == username) > 0

    async def create(self, user: User) -> User:
        if user.id is None:
            user.id = uuid.uuid4()
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            raise _conflict_from(exc) from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception("Failed to create user %s", user.username)
            raise StorageError("Failed to create user") from exc
        logger.info("Created user: %s (%s)", user.id, user.username)
        return user

    async def _get_one(self, *criteria) -> User:
        try:
            result = await self._session.execute(select(User).where(*criteria))
        except SQLAlchemyError as exc:
            logger.exception("User lookup failed")
            raise StorageError("Failed to query users") from exc
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get_by_username(self, username: str) -> User:
        return await self._get_one(User.username == username)

    async def get_by_id(self, user_id: Union[str, uuid.UUID]) -> User:
        return await self._get_one(User.id == parse_user_id(user_id))


def _conflict_from(exc: IntegrityError) -> ConflictError:
    # Both PostgreSQL and SQLite name the offending column or index in the
    # driver message ("users.email", "users_email_key", ...).
    detail = str(exc.orig).lower()
    if "username" in detail:
        return ConflictError.username_exists()
    return ConflictError.email_exists()
