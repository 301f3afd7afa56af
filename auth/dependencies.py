"""
FastAPI dependencies for authentication.

Provides ``get_auth_service`` and ``get_current_user_id``, used across the
auth routes and every protected route.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.service import AuthService
from auth.tokens import TokenIssuer
from database.session import get_db_session
from database.user_repository import UserRepository
from utils.errors import TokenError

_bearer_scheme = HTTPBearer(auto_error=False)


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


async def get_auth_service(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(
        UserRepository(session),
        tokens,
        bcrypt_rounds=request.app.state.settings.bcrypt_rounds,
    )


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``user_id`` (UUID string).
    """
    if credentials is None:
        raise TokenError("User not authenticated", code="NOT_AUTHENTICATED")
    return tokens.verify(credentials.credentials)
