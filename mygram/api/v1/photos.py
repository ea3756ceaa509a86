"""Photo endpoints.

- GET    /api/v1/photos        - List the caller's photos
- GET    /api/v1/photos/{id}   - Get one photo
- POST   /api/v1/photos        - Post a photo
- PUT    /api/v1/photos/{id}   - Update own photo
- DELETE /api/v1/photos/{id}   - Delete own photo
"""

import logging
from contextlib import closing

from flask import Blueprint, jsonify

from ...auth.decorators import auth_required, owner_required
from ...auth.ownership import parse_resource_id
from ...auth.schemas import TokenClaims
from ...db import get_core
from ...utils import isodatetime
from ..validation import validate_request
from .schemas.photo import PhotoCreate, PhotoOwner, PhotoResponse, PhotoUpdate, PhotoWithUser

logger = logging.getLogger(__name__)

photos_bp = Blueprint("photos", __name__, url_prefix="/photos")


def _row_to_photo_response(row) -> PhotoResponse:
    return PhotoResponse(
        id=row["id"],
        title=row["title"],
        caption=row["caption"],
        photo_url=row["url"],
        user_id=row["user_id"],
        created_at=isodatetime.to_datetime(row["created_at"]),
        updated_at=isodatetime.to_datetime(row["updated_at"]),
    )


@photos_bp.get("")
@auth_required
def list_photos(claims: TokenClaims):
    """
    List the caller's photos, each with the owner's email and username.

    Returns:
        200: List of PhotoWithUser
    """
    with closing(get_core()) as core:
        rows = core.photo.list_by_user(claims.user_id)
    photos = [
        PhotoWithUser(
            **_row_to_photo_response(row).model_dump(),
            user=PhotoOwner(email=row["user_email"], username=row["user_username"]),
        )
        for row in rows
    ]
    return jsonify({"data": [p.model_dump(mode="json") for p in photos]}), 200


@photos_bp.get("/<photo_id>")
@auth_required
def get_photo(photo_id: str, claims: TokenClaims):
    with closing(get_core()) as core:
        row = core.photo.get_by_id(parse_resource_id(photo_id))
    return jsonify({"data": _row_to_photo_response(row).model_dump(mode="json")}), 200


@photos_bp.post("")
@auth_required
@validate_request
def create_photo(data: PhotoCreate, claims: TokenClaims):
    """
    Post a photo owned by the caller.

    Returns:
        201: PhotoResponse
        400: Validation error
    """
    with get_core(atomic=True) as core:
        photo_id = core.photo.create(
            title=data.title,
            caption=data.caption,
            url=data.photo_url,
            user_id=claims.user_id,
        )
        row = core.photo.get_by_id(photo_id)

    logger.info(f"User {claims.user_id} posted photo {photo_id}")
    return jsonify({"data": _row_to_photo_response(row).model_dump(mode="json")}), 201


@photos_bp.put("/<photo_id>")
@auth_required
@owner_required("photo", "photo_id")
@validate_request
def update_photo(photo_id: int, data: PhotoUpdate, claims: TokenClaims):
    """
    Update the caller's photo. Only fields present in the body change.

    Returns:
        200: Updated PhotoResponse
        403: Photo belongs to another user
        404: Photo not found
    """
    changes = data.model_dump(exclude_unset=True)
    if "photo_url" in changes:
        changes["url"] = changes.pop("photo_url")

    with get_core(atomic=True) as core:
        core.photo.update(photo_id, changes)
        row = core.photo.get_by_id(photo_id)

    logger.info(f"User {claims.user_id} updated photo {photo_id}")
    return jsonify({"data": _row_to_photo_response(row).model_dump(mode="json")}), 200


@photos_bp.delete("/<photo_id>")
@auth_required
@owner_required("photo", "photo_id")
def delete_photo(photo_id: int, claims: TokenClaims):
    with get_core(atomic=True) as core:
        core.photo.delete(photo_id)

    logger.info(f"User {claims.user_id} deleted photo {photo_id}")
    return jsonify({"message": "Your photo has been successfully deleted"}), 200
