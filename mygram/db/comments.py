"""Comment operations."""

import sqlite3

from . import query
from .resource import ResourceOperations


class CommentOperations(ResourceOperations):
    """Comment table operations."""

    table = "comments"
    kind = "comment"
    editable = frozenset({"message"})

    def create(self, message: str, photo_id: int, user_id: int) -> int:
        """Create a comment on photo_id by user_id and return its ID.

        The caller is responsible for checking the photo exists; the
        foreign key only guards against ids that were never issued.
        """
        return self._insert({
            "message": message,
            "photo_id": photo_id,
            "user_id": user_id,
        })

    def list_by_user(self, user_id: int) -> list[sqlite3.Row]:
        """List a user's live comments with author and photo details."""
        where, params = query.build_where_clause({"c.user_id": user_id})
        return self._conn.execute(
            f"""SELECT c.*,
                      u.username AS user_username, u.email AS user_email,
                      p.title AS photo_title, p.caption AS photo_caption,
                      p.url AS photo_url, p.user_id AS photo_user_id
               FROM comments c
               JOIN users u ON u.id = c.user_id
               JOIN photos p ON p.id = c.photo_id
               WHERE {where} AND c.deleted_at IS NULL
               ORDER BY c.id""",
            params
        ).fetchall()
