"""Comment endpoints.

- GET    /api/v1/comments        - List the caller's comments
- GET    /api/v1/comments/{id}   - Get one comment
- POST   /api/v1/comments        - Comment on a photo
- PUT    /api/v1/comments/{id}   - Edit own comment
- DELETE /api/v1/comments/{id}   - Delete own comment
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
from .schemas.comment import (
    CommentCreate,
    CommentPhoto,
    CommentResponse,
    CommentUpdate,
    CommentUser,
    CommentWithRelations,
)

logger = logging.getLogger(__name__)

comments_bp = Blueprint("comments", __name__, url_prefix="/comments")


def _row_to_comment_response(row) -> CommentResponse:
    return CommentResponse(
        id=row["id"],
        message=row["message"],
        photo_id=row["photo_id"],
        user_id=row["user_id"],
        created_at=isodatetime.to_datetime(row["created_at"]),
        updated_at=isodatetime.to_datetime(row["updated_at"]),
    )


@comments_bp.get("")
@auth_required
def list_comments(claims: TokenClaims):
    """
    List the caller's comments with their author and the commented photo.

    Returns:
        200: List of CommentWithRelations
    """
    with closing(get_core()) as core:
        rows = core.comment.list_by_user(claims.user_id)
    comments = [
        CommentWithRelations(
            **_row_to_comment_response(row).model_dump(),
            user=CommentUser(
                id=row["user_id"],
                email=row["user_email"],
                username=row["user_username"],
            ),
            photo=CommentPhoto(
                id=row["photo_id"],
                title=row["photo_title"],
                caption=row["photo_caption"],
                photo_url=row["photo_url"],
                user_id=row["photo_user_id"],
            ),
        )
        for row in rows
    ]
    return jsonify({"data": [c.model_dump(mode="json") for c in comments]}), 200


@comments_bp.get("/<comment_id>")
@auth_required
def get_comment(comment_id: str, claims: TokenClaims):
    with closing(get_core()) as core:
        row = core.comment.get_by_id(parse_resource_id(comment_id))
    return jsonify({"data": _row_to_comment_response(row).model_dump(mode="json")}), 200


@comments_bp.post("")
@auth_required
@validate_request
def create_comment(data: CommentCreate, claims: TokenClaims):
    """
    Comment on a photo.

    Returns:
        201: CommentResponse
        400: Validation error
        404: Photo not found
    """
    with get_core(atomic=True) as core:
        core.photo.get_by_id(data.photo_id)
        comment_id = core.comment.create(
            message=data.message,
            photo_id=data.photo_id,
            user_id=claims.user_id,
        )
        row = core.comment.get_by_id(comment_id)

    logger.info(f"User {claims.user_id} commented on photo {data.photo_id}")
    return jsonify({"data": _row_to_comment_response(row).model_dump(mode="json")}), 201


@comments_bp.put("/<comment_id>")
@auth_required
@owner_required("comment", "comment_id")
@validate_request
def update_comment(comment_id: int, data: CommentUpdate, claims: TokenClaims):
    with get_core(atomic=True) as core:
        core.comment.update(comment_id, data.model_dump(exclude_unset=True))
        row = core.comment.get_by_id(comment_id)

    logger.info(f"User {claims.user_id} updated comment {comment_id}")
    return jsonify({"data": _row_to_comment_response(row).model_dump(mode="json")}), 200


@comments_bp.delete("/<comment_id>")
@auth_required
@owner_required("comment", "comment_id")
def delete_comment(comment_id: int, claims: TokenClaims):
    with get_core(atomic=True) as core:
        core.comment.delete(comment_id)

    logger.info(f"User {claims.user_id} deleted comment {comment_id}")
    return jsonify({"message": "Your comment has been successfully deleted"}), 200
