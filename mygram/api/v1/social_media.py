"""Social media link endpoints.

- GET    /api/v1/socialmedias        - List the caller's links
- GET    /api/v1/socialmedias/{id}   - Get one link
- POST   /api/v1/socialmedias        - Add a link
- PUT    /api/v1/socialmedias/{id}   - Update own link
- DELETE /api/v1/socialmedias/{id}   - Delete own link
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
from .schemas.social_media import (
    SocialMediaCreate,
    SocialMediaResponse,
    SocialMediaUpdate,
    SocialMediaUser,
    SocialMediaWithUser,
)

logger = logging.getLogger(__name__)

social_media_bp = Blueprint("social_media", __name__, url_prefix="/socialmedias")


def _row_to_social_media_response(row) -> SocialMediaResponse:
    return SocialMediaResponse(
        id=row["id"],
        name=row["name"],
        social_media_url=row["url"],
        user_id=row["user_id"],
        created_at=isodatetime.to_datetime(row["created_at"]),
        updated_at=isodatetime.to_datetime(row["updated_at"]),
    )


@social_media_bp.get("")
@auth_required
def list_social_media(claims: TokenClaims):
    with closing(get_core()) as core:
        rows = core.social_media.list_by_user(claims.user_id)
    entries = [
        SocialMediaWithUser(
            **_row_to_social_media_response(row).model_dump(),
            user=SocialMediaUser(
                id=row["user_id"],
                email=row["user_email"],
                username=row["user_username"],
            ),
        )
        for row in rows
    ]
    return jsonify({"data": [e.model_dump(mode="json") for e in entries]}), 200


@social_media_bp.get("/<social_media_id>")
@auth_required
def get_social_media(social_media_id: str, claims: TokenClaims):
    with closing(get_core()) as core:
        row = core.social_media.get_by_id(parse_resource_id(social_media_id))
    return jsonify({"data": _row_to_social_media_response(row).model_dump(mode="json")}), 200


@social_media_bp.post("")
@auth_required
@validate_request
def create_social_media(data: SocialMediaCreate, claims: TokenClaims):
    with get_core(atomic=True) as core:
        entry_id = core.social_media.create(
            name=data.name,
            url=data.social_media_url,
            user_id=claims.user_id,
        )
        row = core.social_media.get_by_id(entry_id)

    logger.info(f"User {claims.user_id} added social media {entry_id}")
    return jsonify({"data": _row_to_social_media_response(row).model_dump(mode="json")}), 201


@social_media_bp.put("/<social_media_id>")
@auth_required
@owner_required("social_media", "social_media_id")
@validate_request
def update_social_media(social_media_id: int, data: SocialMediaUpdate, claims: TokenClaims):
    changes = data.model_dump(exclude_unset=True)
    if "social_media_url" in changes:
        changes["url"] = changes.pop("social_media_url")

    with get_core(atomic=True) as core:
        core.social_media.update(social_media_id, changes)
        row = core.social_media.get_by_id(social_media_id)

    logger.info(f"User {claims.user_id} updated social media {social_media_id}")
    return jsonify({"data": _row_to_social_media_response(row).model_dump(mode="json")}), 200


@social_media_bp.delete("/<social_media_id>")
@auth_required
@owner_required("social_media", "social_media_id")
def delete_social_media(social_media_id: int, claims: TokenClaims):
    with get_core(atomic=True) as core:
        core.social_media.delete(social_media_id)

    logger.info(f"User {claims.user_id} deleted social media {social_media_id}")
    return jsonify({"message": "Your social media has been successfully deleted"}), 200
