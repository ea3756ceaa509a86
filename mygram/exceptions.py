"""Exception hierarchy for MyGram.

Every error raised on purpose inside the application derives from
MyGramError. The Flask error handlers in main.py turn each subclass into
the JSON error envelope with the matching HTTP status:

- ValidationError      -> 400
- AuthenticationError  -> 401
- AuthorizationError   -> 403
- ResourceNotFound     -> 404
- anything else        -> 500

Token and password errors are internal signals. The authentication gate
and the login service convert them to AuthenticationError, so they never
reach a client directly.
"""

from typing import Any


class MyGramError(Exception):
    """Base class for all application errors.

    Args:
        message: Stable, human readable message returned to the client
        errors: Optional list of extra error entries (strings or dicts)
    """

    def __init__(self, message: str, errors: list[Any] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ValidationError(MyGramError):
    """Malformed or missing input (400)."""


class AuthenticationError(MyGramError):
    """Missing, invalid or expired credentials (401)."""


class AuthorizationError(MyGramError):
    """Valid identity acting on a resource it does not own (403)."""


class ResourceNotFound(MyGramError):
    """Requested resource does not exist (404)."""


class DatabaseError(MyGramError):
    """Storage failure (500)."""


# ============================================================================
# Credential errors
# ============================================================================


class HashError(MyGramError):
    """Password hashing failed."""


class PasswordMismatch(MyGramError):
    """Plaintext password does not match the stored hash."""


class SigningError(MyGramError):
    """Access token could not be signed."""


class TokenError(MyGramError):
    """Access token could not be validated.

    Callers must treat every subclass the same way: the request is
    unauthenticated.
    """


class TokenExpired(TokenError):
    """Token is outside its validity window (past exp or before nbf)."""


class InvalidSignature(TokenError):
    """Token signature does not verify with the server key."""


class MalformedToken(TokenError):
    """Token cannot be parsed or lacks the expected claims."""
