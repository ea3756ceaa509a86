"""Authentication Pydantic schemas for API validation."""

from .user import (
    TokenClaims,
    TokenResponse,
    UserLogin,
    UserResponse,
    UserSignUp,
    UserUpdate,
)

__all__ = [
    "UserSignUp",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "TokenClaims",
    "TokenResponse",
]
