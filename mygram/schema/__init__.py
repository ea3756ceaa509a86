"""Schema module for MyGram.

schema.sql is the source of truth for the data model. It is applied by
mygram.db.init_db() on a fresh database.
"""

from pathlib import Path

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

__all__ = ["SCHEMA_PATH"]
