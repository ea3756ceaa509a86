"""JWT access token service.

Tokens are HS256-signed, carry the caller's identity claims and expire
after ``settings.jwt_expiry_minutes``. There is no refresh flow and no
revocation list: a token stays valid until it expires.

Validation reports exactly one of:
- TokenExpired: past exp, or nbf in the future. Checked before the
  signature, so an expired token is reported as expired even if forged.
- InvalidSignature: signature does not verify with the server key.
- MalformedToken: anything else.
"""

import logging
from datetime import timedelta

import jwt

from ..config import settings
from ..exceptions import InvalidSignature, MalformedToken, SigningError, TokenExpired
from ..utils import isodatetime, uid
from .schemas import TokenClaims, UserResponse

logger = logging.getLogger(__name__)

ACCESS_TOKEN_SUBJECT = "access-token"
REQUIRED_CLAIMS = ["jti", "iss", "aud", "sub", "exp", "iat", "nbf", "user_id", "username"]


def generate_access_token(user: UserResponse) -> str:
    """Issue a signed access token for user.

    Raises:
        SigningError: If no signing key is configured or signing fails
    """
    if not settings.jwt_secret_key:
        raise SigningError("Failed to sign token", ["signing key is not configured"])

    now = isodatetime.now_unix()
    payload = {
        "jti": uid.generate_uuid(),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "sub": ACCESS_TOKEN_SUBJECT,
        "iat": now,
        "nbf": now,
        "exp": now + settings.jwt_expiry_minutes * 60,
        "user_id": user.id,
        "username": user.username,
        "dob": user.dob.isoformat() if user.dob else None,
    }

    try:
        return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        raise SigningError("Failed to sign token", [str(e)]) from e


def validate_access_token(token: str) -> TokenClaims:
    """Validate an access token and return its claims.

    Raises:
        TokenExpired: Outside the validity window
        InvalidSignature: Signature does not verify
        MalformedToken: Not a well-formed MyGram access token
    """
    # Validity window first, signature second
    try:
        jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": True, "verify_nbf": True},
        )
    except (jwt.ExpiredSignatureError, jwt.ImmatureSignatureError) as e:
        raise TokenExpired("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise MalformedToken("Token is malformed", [str(e)]) from e

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={"require": REQUIRED_CLAIMS},
        )
    except (jwt.ExpiredSignatureError, jwt.ImmatureSignatureError) as e:
        raise TokenExpired("Token has expired") from e
    except jwt.InvalidSignatureError as e:
        raise InvalidSignature("Token signature is invalid") from e
    except jwt.InvalidTokenError as e:
        raise MalformedToken("Token is malformed", [str(e)]) from e

    if payload.get("sub") != ACCESS_TOKEN_SUBJECT:
        raise MalformedToken("Token is malformed", ["unexpected subject"])

    try:
        return TokenClaims(**payload)
    except ValueError as e:
        raise MalformedToken("Token is malformed", [str(e)]) from e


# ============================================================================
# Introspection
# ============================================================================


def decode_token_no_validation(token: str) -> dict:
    """Decode a token WITHOUT verifying anything. Never use for auth."""
    return jwt.decode(token, options={"verify_signature": False, "verify_exp": False})


def get_token_expiry_remaining(token: str) -> timedelta | None:
    """Time until the token expires, or None if expired or unreadable."""
    try:
        payload = decode_token_no_validation(token)
        exp = int(payload["exp"])
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
        return None

    remaining = exp - isodatetime.now_unix()
    if remaining <= 0:
        return None
    return timedelta(seconds=remaining)


def is_token_expired(token: str) -> bool:
    """True if the token is expired or cannot be read."""
    return get_token_expiry_remaining(token) is None
