"""User operations.

A user owns itself, so the ownership column is the primary key.
"""

import sqlite3
from typing import Any

from .resource import ResourceOperations
from ..utils import isodatetime


class UserOperations(ResourceOperations):
    """User table operations."""

    table = "users"
    kind = "user"
    owner_column = "id"
    editable = frozenset({"username", "email", "dob", "age"})

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        dob: str | None = None,
        age: int | None = None,
    ) -> int:
        """Create a user and return its ID.

        Raises:
            sqlite3.IntegrityError: If username or email is already taken
        """
        return self._insert({
            "username": username,
            "email": email,
            "password_hash": password_hash,
            "dob": dob,
            "age": age,
        })

    def get_by_email(self, email: str) -> sqlite3.Row | None:
        """Get a live user by email, or None."""
        return self._conn.execute(
            "SELECT * FROM users WHERE email = ? AND deleted_at IS NULL",
            (email,)
        ).fetchone()

    def is_taken(self, username: str | None = None, email: str | None = None,
                 exclude_id: int | None = None) -> bool:
        """Check whether a username or email belongs to another row.

        Soft-deleted users still hold their username and email, since the
        UNIQUE constraints cover every row.
        """
        params: list[Any] = []
        fragments = []
        if username is not None:
            fragments.append("username = ?")
            params.append(username)
        if email is not None:
            fragments.append("email = ?")
            params.append(email)
        if not fragments:
            return False

        sql = f"SELECT 1 FROM users WHERE ({' OR '.join(fragments)})"
        if exclude_id is not None:
            sql += " AND id != ?"
            params.append(exclude_id)

        return self._conn.execute(sql, params).fetchone() is not None

    def list_all(self) -> list[sqlite3.Row]:
        """List all live users, oldest first."""
        return self._conn.execute(
            "SELECT * FROM users WHERE deleted_at IS NULL ORDER BY id"
        ).fetchall()

    def delete(self, resource_id: int) -> None:
        """Soft delete a user and destroy its credential."""
        now = isodatetime.now()
        self._conn.execute(
            "UPDATE users SET deleted_at = ?, updated_at = ?, password_hash = '' "
            "WHERE id = ? AND deleted_at IS NULL",
            (now, now, resource_id)
        )
