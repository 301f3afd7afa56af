"""
Pydantic schemas for the shop backend's HTTP surface.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════════
# Auth — requests
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    # Length and character rules live in utils.validators so that they run in
    # a fixed order with a single message.
    name: str
    username: str
    email: str
    password: str


class LoginRequest(BaseModel):
    username: str
    password: str


# ═══════════════════════════════════════════════════════════════════════════════
# Auth — responses
# ═══════════════════════════════════════════════════════════════════════════════


class UserOut(BaseModel):
    """Public identity fields. Never carries the password hash."""

    id: str
    name: str
    username: str
    email: str

    @classmethod
    def from_user(cls, user: Any) -> "UserOut":
        return cls(
            id=str(user.id),
            name=user.name,
            username=user.username,
            email=user.email,
        )


class ProfileUser(UserOut):
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: Any) -> "ProfileUser":
        return cls(
            id=str(user.id),
            name=user.name,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class ProfileResponse(BaseModel):
    message: str
    user: ProfileUser


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    code: Optional[str] = None
    details: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════════


class Product(BaseModel):
    """One catalog item as relayed from the upstream service."""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str = ""
    description: str = ""
    price: float = 0.0
    rating: float = 0.0
    stock: int = 0
    brand: str = ""
    category: str = ""
    thumbnail: str = ""
    images: List[str] = Field(default_factory=list)


class ProductPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    products: List[Product] = Field(default_factory=list)
    total: int = 0
    skip: int = 0
    limit: int = 0


class CategoriesResponse(BaseModel):
    categories: List[str]


class HealthResponse(BaseModel):
    status: str
    mode: str
