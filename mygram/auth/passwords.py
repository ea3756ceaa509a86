"""Password hashing with bcrypt.

Plaintext passwords are never stored or logged. Each hash carries its own
random salt and the configured work factor.
"""

import bcrypt

from ..config import settings
from ..exceptions import HashError, PasswordMismatch


def hash_password(password: str) -> str:
    """Hash a password with bcrypt.

    Args:
        password: Plaintext password

    Returns:
        Bcrypt hash (60 characters)

    Raises:
        HashError: If bcrypt rejects the input
    """
    try:
        salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    except ValueError as e:
        raise HashError("Failed to hash password", [str(e)]) from e
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored hash.

    A malformed or empty stored hash never matches.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def check_password(password: str, hashed: str) -> None:
    """Raise PasswordMismatch unless password matches hashed."""
    if not verify_password(password, hashed):
        raise PasswordMismatch("Password does not match")
