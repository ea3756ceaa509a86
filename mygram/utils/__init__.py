"""Utility functions for MyGram.

Import convention: use module-level imports for clarity.

    from mygram.utils import isodatetime, uid
    timestamp = isodatetime.now()
    token_id = uid.generate_uuid()
"""

from . import isodatetime, uid

__all__ = ["isodatetime", "uid"]
