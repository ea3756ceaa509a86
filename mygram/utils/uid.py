"""UUID generation utilities.

Database rows use integer keys; UUIDs identify issued access tokens (jti).
"""

from uuid import uuid4


def generate_uuid() -> str:
    """Generate a random UUID v4 as a string."""
    return str(uuid4())
