"""Ownership authorization for by-id mutations.

One routine serves every resource kind. A resource only has to say what
it is called and who owns a given id; the db operations classes already
do both (see mygram.db.resource.ResourceOperations).

Checks run in a fixed order and the first failure stops the request:

1. caller has no user id          -> ValidationError (400)
2. path id is not a positive int  -> ValidationError (400)
3. owner lookup fails             -> DatabaseError (500)
4. resource does not exist        -> ResourceNotFound (404)
5. caller is not the owner        -> AuthorizationError (403)
"""

import logging
from typing import Protocol

from ..exceptions import AuthorizationError, ResourceNotFound, ValidationError
from .schemas import TokenClaims

logger = logging.getLogger(__name__)


class OwnedResource(Protocol):
    """Anything whose rows belong to a user."""

    kind: str

    def owner_of(self, resource_id: int) -> int | None:
        """Owner's user id, or None if the resource doesn't exist."""
        ...


# Largest value SQLite stores in an INTEGER column
MAX_RESOURCE_ID = 2**63 - 1


def parse_resource_id(raw_id) -> int:
    """Parse a path id into a positive integer that fits an SQLite INTEGER.

    Only plain ASCII digits are accepted.

    Raises:
        ValidationError: If raw_id is missing, zero, negative, out of range
            or not a number
    """
    text = "" if raw_id is None or isinstance(raw_id, bool) else str(raw_id).strip()
    resource_id = int(text) if text.isascii() and text.isdigit() else 0

    if not 0 < resource_id <= MAX_RESOURCE_ID:
        raise ValidationError("invalid required param", [f"invalid id: {raw_id!r}"])
    return resource_id


def check_ownership(claims: TokenClaims | None, raw_id, resource: OwnedResource) -> int:
    """Verify the caller owns the resource identified by raw_id.

    Args:
        claims: Claims of the authenticated caller
        raw_id: Id taken from the request path, not yet parsed
        resource: Where to look up the owner

    Returns:
        The parsed resource id

    Raises:
        ValidationError, DatabaseError, ResourceNotFound, AuthorizationError
    """
    caller_id = claims.user_id if claims is not None else 0
    if not caller_id:
        raise ValidationError("invalid required param", ["missing user id"])

    resource_id = parse_resource_id(raw_id)

    owner_id = resource.owner_of(resource_id)
    if owner_id is None:
        raise ResourceNotFound(
            f"{resource.kind.title()} Not Found",
            [f"{resource.kind} {resource_id} does not exist"]
        )

    if owner_id != caller_id:
        logger.warning(
            f"User {caller_id} denied access to {resource.kind} {resource_id}"
        )
        raise AuthorizationError(
            "Forbidden",
            [f"You are not authorized to modify this {resource.kind}"]
        )

    logger.debug(f"User {caller_id} owns {resource.kind} {resource_id}")
    return resource_id
