"""Social media link operations."""

import sqlite3

from . import query
from .resource import ResourceOperations


class SocialMediaOperations(ResourceOperations):
    """Social media table operations."""

    table = "social_media"
    kind = "social media"
    editable = frozenset({"name", "url"})

    def create(self, name: str, url: str, user_id: int) -> int:
        """Create a social media link owned by user_id and return its ID."""
        return self._insert({"name": name, "url": url, "user_id": user_id})

    def list_by_user(self, user_id: int) -> list[sqlite3.Row]:
        """List a user's live links with the owner's id, username and email."""
        where, params = query.build_where_clause({"s.user_id": user_id})
        return self._conn.execute(
            f"""SELECT s.*, u.username AS user_username, u.email AS user_email
               FROM social_media s
               JOIN users u ON u.id = s.user_id
               WHERE {where} AND s.deleted_at IS NULL
               ORDER BY s.id""",
            params
        ).fetchall()
