"""Shared operations for soft-deletable, user-owned tables.

Every MyGram table has an integer primary key, created_at/updated_at
timestamps and a deleted_at column. Rows with deleted_at set are treated
as absent by every read in this module.

Subclasses only declare the table, the human readable kind, the column
holding the owner's user id and the columns callers may update.

IMPORT CONVENTION:
- Core accesses the subclasses through core.user, core.photo, core.comment
  and core.social_media
- NO direct import needed when using Core API
"""

import logging
import sqlite3
from typing import Any

from . import query
from ..exceptions import DatabaseError, ResourceNotFound
from ..utils import isodatetime

logger = logging.getLogger(__name__)


class ResourceOperations:
    """Base operations for one table.

    Also satisfies the OwnedResource capability used by the ownership gate
    (see mygram.auth.ownership): it exposes ``kind`` and ``owner_of()``.
    """

    table: str = ""
    kind: str = "resource"
    owner_column: str = "user_id"
    editable: frozenset[str] = frozenset()

    def __init__(self, conn: sqlite3.Connection):
        """Initialize operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    @property
    def label(self) -> str:
        """Kind formatted for client-facing messages, e.g. 'Social Media'."""
        return self.kind.title()

    def find(self, resource_id: int) -> sqlite3.Row | None:
        """Get a live row by ID, or None if absent or soft-deleted."""
        return self._conn.execute(
            f"SELECT * FROM {self.table} WHERE id = ? AND deleted_at IS NULL",
            (resource_id,)
        ).fetchone()

    def get_by_id(self, resource_id: int) -> sqlite3.Row:
        """Get a live row by ID.

        Raises:
            ResourceNotFound: If the row doesn't exist or was deleted
        """
        row = self.find(resource_id)
        if row is None:
            raise ResourceNotFound(
                f"{self.label} Not Found",
                [f"{self.kind} {resource_id} does not exist"]
            )
        return row

    def owner_of(self, resource_id: int) -> int | None:
        """Return the owning user id of a live row, or None if not found.

        Raises:
            DatabaseError: If the lookup itself fails
        """
        try:
            row = self._conn.execute(
                f"SELECT {self.owner_column} FROM {self.table} "
                "WHERE id = ? AND deleted_at IS NULL",
                (resource_id,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Owner lookup failed for {self.kind} {resource_id}: {e}")
            raise DatabaseError("Internal Server Error") from e

        return row[0] if row else None

    def _insert(self, values: dict[str, Any]) -> int:
        """Insert a row with fresh timestamps and return its new ID."""
        now = isodatetime.now()
        values = {**values, "created_at": now, "updated_at": now}
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)

        cursor = self._conn.execute(
            f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})",
            list(values.values())
        )
        return cursor.lastrowid

    def update(self, resource_id: int, data: dict[str, Any]) -> None:
        """Update a row with partial data.

        Args:
            resource_id: The ID of the row to update
            data: Dictionary of column names to new values

        Note:
            - Only columns listed in ``editable`` are written
            - None values are skipped
            - updated_at is refreshed when anything changes
        """
        allowed = {k: v for k, v in data.items() if k in self.editable}
        update_clause, params = query.build_update_clause(allowed)

        if update_clause:
            params.extend([isodatetime.now(), resource_id])
            self._conn.execute(
                f"UPDATE {self.table} SET {update_clause}, updated_at = ? "
                "WHERE id = ? AND deleted_at IS NULL",
                params
            )

    def delete(self, resource_id: int) -> None:
        """Soft delete a row by setting deleted_at."""
        now = isodatetime.now()
        self._conn.execute(
            f"UPDATE {self.table} SET deleted_at = ?, updated_at = ? "
            "WHERE id = ? AND deleted_at IS NULL",
            (now, now, resource_id)
        )
