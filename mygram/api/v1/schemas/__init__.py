"""Pydantic schemas for API v1.

Auth schemas are re-exported from mygram.auth.schemas for use in endpoints.
"""

from mygram.auth.schemas import (
    TokenClaims,
    TokenResponse,
    UserLogin,
    UserResponse,
    UserSignUp,
    UserUpdate,
)

from .comment import (
    CommentCreate,
    CommentPhoto,
    CommentResponse,
    CommentUpdate,
    CommentUser,
    CommentWithRelations,
)
from .photo import (
    PhotoBase,
    PhotoCreate,
    PhotoOwner,
    PhotoResponse,
    PhotoUpdate,
    PhotoWithUser,
)
from .social_media import (
    SocialMediaCreate,
    SocialMediaResponse,
    SocialMediaUpdate,
    SocialMediaUser,
    SocialMediaWithUser,
)

__all__ = [
    "PhotoBase",
    "PhotoCreate",
    "PhotoUpdate",
    "PhotoResponse",
    "PhotoOwner",
    "PhotoWithUser",
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "CommentUser",
    "CommentPhoto",
    "CommentWithRelations",
    "SocialMediaCreate",
    "SocialMediaUpdate",
    "SocialMediaResponse",
    "SocialMediaUser",
    "SocialMediaWithUser",
    # Auth schemas (re-exported from mygram.auth.schemas)
    "UserSignUp",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "TokenClaims",
    "TokenResponse",
]
