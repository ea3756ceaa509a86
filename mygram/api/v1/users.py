"""User account endpoints.

- POST   /api/v1/users/register   - Sign up, returns a token
- POST   /api/v1/users/login      - Log in, returns a token
- GET    /api/v1/users            - List users
- GET    /api/v1/users/{id}       - Get one user
- PUT    /api/v1/users/{id}       - Update own profile
- DELETE /api/v1/users            - Delete own account
- DELETE /api/v1/users/{id}       - Delete own account by id
"""

from contextlib import closing

from flask import Blueprint, jsonify

from ...auth import service
from ...auth.decorators import auth_required, owner_required
from ...auth.ownership import parse_resource_id
from ...auth.schemas import TokenClaims, TokenResponse, UserLogin, UserSignUp, UserUpdate
from ...db import get_core
from ..validation import validate_request

users_bp = Blueprint("users", __name__, url_prefix="/users")

ACCOUNT_DELETED = "Your account has been successfully deleted"


@users_bp.post("/register")
@validate_request
def register(data: UserSignUp):
    """
    Register a new user.

    Returns:
        201: {"data": {"token": ...}}
        400: Validation error or username/email already registered
    """
    with get_core(atomic=True) as core:
        token_str = service.sign_up(core, data)

    return jsonify({"data": TokenResponse(token=token_str).model_dump()}), 201


@users_bp.post("/login")
@validate_request
def login(data: UserLogin):
    """
    Log in with email and password.

    Returns:
        200: {"data": {"token": ...}}
        401: Invalid email or password
    """
    with closing(get_core()) as core:
        token_str = service.login(core, data)
    return jsonify({"data": TokenResponse(token=token_str).model_dump()}), 200


@users_bp.get("")
@auth_required
def list_users(claims: TokenClaims):
    with closing(get_core()) as core:
        users = service.list_users(core)
    return jsonify({"data": [u.model_dump(mode="json") for u in users]}), 200


@users_bp.get("/<user_id>")
@auth_required
def get_user(user_id: str, claims: TokenClaims):
    with closing(get_core()) as core:
        user = service.get_user(core, parse_resource_id(user_id))
    return jsonify({"data": user.model_dump(mode="json")}), 200


@users_bp.put("/<user_id>")
@auth_required
@owner_required("user", "user_id")
@validate_request
def update_user(user_id: int, data: UserUpdate, claims: TokenClaims):
    """
    Update the caller's own profile. Only fields present in the body change.

    Returns:
        200: Updated user
        400: Validation error or username/email taken
        403: Target is another user
        404: User not found
    """
    with get_core(atomic=True) as core:
        user = service.update_user(core, user_id, data)

    return jsonify({"data": user.model_dump(mode="json")}), 200


@users_bp.delete("")
@auth_required
def delete_current_user(claims: TokenClaims):
    """Delete the caller's own account."""
    with get_core(atomic=True) as core:
        service.delete_user(core, claims.user_id)

    return jsonify({"message": ACCOUNT_DELETED}), 200


@users_bp.delete("/<user_id>")
@auth_required
@owner_required("user", "user_id")
def delete_user(user_id: int, claims: TokenClaims):
    with get_core(atomic=True) as core:
        service.delete_user(core, user_id)

    return jsonify({"message": ACCOUNT_DELETED}), 200
