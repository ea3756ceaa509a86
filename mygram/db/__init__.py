"""Database module for MyGram.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to the
per-table operations.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Connection closes on context exit (atomic=True) or on close() for reads
- Each table gets an operations class built on ResourceOperations

Usage:
    Reads (autocommit):
    >>> with closing(get_core()) as core:
    ...     photo = core.photo.get_by_id(5)

    Writes (atomic):
    >>> with get_core(atomic=True) as core:
    ...     photo_id = core.photo.create(title="Sunset", url="...", user_id=1)
    ...     # commits on exit, rolls back on exception
"""

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import settings
from ..schema import SCHEMA_PATH

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from .comments import CommentOperations
    from .photos import PhotoOperations
    from .social_media import SocialMediaOperations
    from .users import UserOperations


class Core:
    """
    Database Core with per-table operations.

    Connection Lifecycle:
    - atomic=True: Connection closes on __exit__ from context manager
    - atomic=False: Statements autocommit, caller closes the connection
      (usually via contextlib.closing)
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
                    If False, Core has autocommit semantics.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None
        self._photo_ops = None
        self._comment_ops = None
        self._social_media_ops = None

    @property
    def user(self) -> "UserOperations":
        """User operations (lazy-loaded, cached)."""
        if self._user_ops is None:
            from .users import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    @property
    def photo(self) -> "PhotoOperations":
        """Photo operations (lazy-loaded, cached)."""
        if self._photo_ops is None:
            from .photos import PhotoOperations
            self._photo_ops = PhotoOperations(self._conn)
        return self._photo_ops

    @property
    def comment(self) -> "CommentOperations":
        """Comment operations (lazy-loaded, cached)."""
        if self._comment_ops is None:
            from .comments import CommentOperations
            self._comment_ops = CommentOperations(self._conn)
        return self._comment_ops

    @property
    def social_media(self) -> "SocialMediaOperations":
        """Social media operations (lazy-loaded, cached)."""
        if self._social_media_ops is None:
            from .social_media import SocialMediaOperations
            self._social_media_ops = SocialMediaOperations(self._conn)
        return self._social_media_ops

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()


def _create_connection() -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row,
        foreign keys enabled and the configured busy timeout.
    """
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path), timeout=settings.database_timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                All writes inside the block commit together.
                If False (default), returns a Core for reads and single
                autocommit statements.

    Returns:
        Core instance with user/photo/comment/social_media operations
    """
    conn = _create_connection()
    if not atomic:
        conn.isolation_level = None
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db():
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    db = sqlite3.connect(str(db_path), timeout=settings.database_timeout)
    try:
        cursor = db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            return

        logger.info(f"Applying schema to fresh database at {db_path}")
        db.executescript(SCHEMA_PATH.read_text())
        db.commit()
    finally:
        db.close()
