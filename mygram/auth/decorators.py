"""Authentication and ownership decorators for protected endpoints.

- @auth_required validates the bearer token and passes the claims to the
  view as the ``claims`` keyword argument
- @owner_required(resource, id_param) must sit below @auth_required; it
  checks the caller owns the target and replaces the raw path id with
  the parsed integer

Claims travel explicitly through keyword arguments, never through flask.g.

Example:
```python
@photos_bp.put("/<photo_id>")
@auth_required
@owner_required("photo", "photo_id")
@validate_request
def update_photo(photo_id: int, data: PhotoUpdate, claims: TokenClaims):
    ...
```
"""

import logging
from contextlib import closing
from functools import wraps

from flask import request

from ..db import get_core
from ..exceptions import AuthenticationError, TokenError
from . import token
from .ownership import check_ownership
from .schemas import TokenClaims

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


# ============================================================================
# Authentication
# ============================================================================


def authenticate_header(auth_header: str | None) -> TokenClaims:
    """Turn a raw Authorization header into validated claims.

    Raises:
        AuthenticationError: With message "unauthorized" and an errors list
            saying which check failed
    """
    if not auth_header:
        logger.warning("Request without authorization header")
        raise AuthenticationError("unauthorized", ["missing authorization header"])

    parts = auth_header.split(" ")
    if len(parts) != 2:
        logger.warning("Malformed authorization header")
        raise AuthenticationError("unauthorized", ["invalid token"])

    scheme, token_str = parts
    if scheme != BEARER_SCHEME:
        logger.warning(f"Unsupported authorization scheme: {scheme}")
        raise AuthenticationError("unauthorized", ["invalid authorization method"])

    try:
        claims = token.validate_access_token(token_str)
    except TokenError as e:
        logger.warning(f"Token rejected: {type(e).__name__}")
        raise AuthenticationError("unauthorized", ["invalid token", "failed to decode"]) from e

    logger.debug(f"Authenticated user {claims.user_id}")
    return claims


def auth_required(f):
    """Require a valid bearer token; the view receives ``claims=``."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        kwargs["claims"] = authenticate_header(request.headers.get("Authorization"))
        return f(*args, **kwargs)

    return wrapper


# ============================================================================
# Ownership
# ============================================================================


def owner_required(resource_name: str, id_param: str):
    """Require the caller to own the resource named by the path parameter.

    Args:
        resource_name: Core attribute of the operations to check against
            ("user", "photo", "comment", "social_media")
        id_param: Name of the path parameter holding the id
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            with closing(get_core()) as core:
                kwargs[id_param] = check_ownership(
                    kwargs.get("claims"), kwargs.get(id_param), getattr(core, resource_name)
                )
            return f(*args, **kwargs)

        return wrapper

    return decorator
