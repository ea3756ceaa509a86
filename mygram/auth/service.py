"""User account service: registration, login and profile changes.

Functions take a Core so callers decide the transaction boundary:

    with get_core(atomic=True) as core:
        token_str = service.sign_up(core, data)
"""

import logging
import sqlite3

from ..db import Core
from ..exceptions import AuthenticationError, PasswordMismatch, ValidationError
from ..utils import isodatetime
from . import passwords, token
from .schemas import UserLogin, UserResponse, UserSignUp, UserUpdate

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "invalid email or password"


def row_to_user(row: sqlite3.Row) -> UserResponse:
    """Convert a users row into a UserResponse (drops the password hash)."""
    return UserResponse(
        id=row["id"],
        username=row["username"],
        email=row["email"],
        dob=isodatetime.to_date(row["dob"]) if row["dob"] else None,
        age=row["age"],
        created_at=isodatetime.to_datetime(row["created_at"]),
        updated_at=isodatetime.to_datetime(row["updated_at"]),
    )


def _ensure_available(core: Core, username: str | None, email: str | None,
                      exclude_id: int | None = None) -> None:
    if core.user.is_taken(username=username, exclude_id=exclude_id):
        raise ValidationError("username already registered", [f"username: {username}"])
    if core.user.is_taken(email=email, exclude_id=exclude_id):
        raise ValidationError("email already registered", [f"email: {email}"])


def sign_up(core: Core, data: UserSignUp) -> str:
    """Register a user and return an access token for it.

    Raises:
        ValidationError: If the username or email is already registered
        HashError, SigningError: On internal failure
    """
    _ensure_available(core, data.username, data.email)

    password_hash = passwords.hash_password(data.password)
    try:
        user_id = core.user.create(
            username=data.username,
            email=data.email,
            password_hash=password_hash,
            dob=isodatetime.to_datestring(data.dob) if data.dob else None,
            age=data.age,
        )
    except sqlite3.IntegrityError as e:
        # Lost a race with a concurrent signup
        raise ValidationError("username or email already registered") from e

    user = row_to_user(core.user.get_by_id(user_id))
    logger.info(f"Registered user {user.id} ({user.username})")
    return token.generate_access_token(user)


def authenticate(core: Core, email: str, password: str) -> UserResponse:
    """Return the user matching the credentials.

    Unknown email and wrong password are reported identically.

    Raises:
        AuthenticationError: If the credentials don't match a live user
    """
    row = core.user.get_by_email(email.lower())
    if row is None:
        logger.warning("Login attempt for unknown email")
        raise AuthenticationError(INVALID_CREDENTIALS)

    try:
        passwords.check_password(password, row["password_hash"])
    except PasswordMismatch as e:
        logger.warning(f"Wrong password for user {row['id']}")
        raise AuthenticationError(INVALID_CREDENTIALS) from e

    return row_to_user(row)


def login(core: Core, data: UserLogin) -> str:
    """Authenticate and return a fresh access token."""
    user = authenticate(core, data.email, data.password)
    logger.info(f"User {user.id} logged in")
    return token.generate_access_token(user)


def get_user(core: Core, user_id: int) -> UserResponse:
    """Get a live user by id.

    Raises:
        ResourceNotFound: If the user doesn't exist or was deleted
    """
    return row_to_user(core.user.get_by_id(user_id))


def list_users(core: Core) -> list[UserResponse]:
    return [row_to_user(row) for row in core.user.list_all()]


def update_user(core: Core, user_id: int, data: UserUpdate) -> UserResponse:
    """Apply a partial profile update and return the updated user."""
    changes = data.model_dump(exclude_unset=True)
    _ensure_available(core, changes.get("username"), changes.get("email"), exclude_id=user_id)

    if changes.get("dob") is not None:
        changes["dob"] = isodatetime.to_datestring(changes["dob"])

    core.user.get_by_id(user_id)
    try:
        core.user.update(user_id, changes)
    except sqlite3.IntegrityError as e:
        # Lost a race with a concurrent signup or update
        raise ValidationError("username or email already registered") from e
    logger.info(f"Updated user {user_id}")
    return get_user(core, user_id)


def delete_user(core: Core, user_id: int) -> None:
    """Soft delete a user and destroy its credential.

    Tokens already issued to the user stay valid until they expire.
    """
    core.user.get_by_id(user_id)
    core.user.delete(user_id)
    logger.info(f"Deleted user {user_id}")
