"""
Auth API routes — register, login, logout, profile, checkout.

Route prefix: /api
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from auth.dependencies import get_auth_service, get_current_user_id
from auth.service import AuthService
from utils.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    ProfileUser,
    RegisterRequest,
    UserOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Public endpoints ───────────────────────────────────────────────────


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new user."""
    user, token = await service.register(req)
    return AuthResponse(
        message="Account created successfully",
        token=token,
        user=UserOut.from_user(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Login with username + password."""
    user, token = await service.login(req)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserOut.from_user(user),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout() -> MessageResponse:
    # Tokens are stateless; the client simply drops its copy.
    return MessageResponse(message="Logout successful")


# ── Protected endpoints ────────────────────────────────────────────────


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
) -> ProfileResponse:
    user = await service.get_profile(user_id)
    return ProfileResponse(
        message="Profile retrieved successfully",
        user=ProfileUser.from_user(user),
    )


@router.post("/checkout", response_model=MessageResponse)
async def checkout(
    user_id: str = Depends(get_current_user_id),
) -> MessageResponse:
    logger.debug("Checkout requested by %s", user_id)
    return MessageResponse(message="Coming soon")
