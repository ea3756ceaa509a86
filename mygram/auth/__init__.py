"""Authentication and authorization for MyGram.

- Password hashing and verification (passwords)
- JWT access token issue and validation (token)
- Ownership checks for by-id mutations (ownership)
- Decorators enforcing both on endpoints (decorators)
- Registration and login (service)

Account endpoints live under /api/v1/users (see mygram.api.v1.users).
"""

from . import schemas, token

__all__ = ["schemas", "token"]
