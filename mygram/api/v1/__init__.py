"""API v1 endpoints for MyGram.

This module provides the ApiV1 blueprint that aggregates all v1 resources:
- Users (/users)
- Photos (/photos)
- Comments (/comments)
- Social media links (/socialmedias)

Authentication is declared per endpoint with @auth_required, since
/users/register and /users/login must stay public.
"""

from flask import Blueprint

from ...config import settings
from . import comments, photos, social_media, users

api_v1_bp = Blueprint("api_v1", __name__, url_prefix=settings.api_v1_prefix)

api_v1_bp.register_blueprint(users.users_bp)
api_v1_bp.register_blueprint(photos.photos_bp)
api_v1_bp.register_blueprint(comments.comments_bp)
api_v1_bp.register_blueprint(social_media.social_media_bp)

__all__ = ["api_v1_bp"]
