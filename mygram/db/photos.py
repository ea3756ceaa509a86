"""Photo operations."""

import sqlite3

from . import query
from .resource import ResourceOperations


class PhotoOperations(ResourceOperations):
    """Photo table operations."""

    table = "photos"
    kind = "photo"
    editable = frozenset({"title", "caption", "url"})

    def create(self, title: str, url: str, user_id: int, caption: str = "") -> int:
        """Create a photo owned by user_id and return its ID."""
        return self._insert({
            "title": title,
            "caption": caption,
            "url": url,
            "user_id": user_id,
        })

    def list_by_user(self, user_id: int) -> list[sqlite3.Row]:
        """List a user's live photos with the owner's username and email."""
        where, params = query.build_where_clause({"p.user_id": user_id})
        return self._conn.execute(
            f"""SELECT p.*, u.username AS user_username, u.email AS user_email
               FROM photos p
               JOIN users u ON u.id = p.user_id
               WHERE {where} AND p.deleted_at IS NULL
               ORDER BY p.id""",
            params
        ).fetchall()
