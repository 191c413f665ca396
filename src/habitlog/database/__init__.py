"""Public interface for the database package.

Exposes the record store used by the shell, the connection helpers it is
built on, and the error types callers may need to catch.
"""

from .connection import get_connection, transaction
from .errors import (
    DatabaseError,
    IntegrityError,
    NotFoundError,
    StorageUnavailableError,
)
from .schema import ensure_schema, generate_seed_entries, table_exists
from .store import HabitStore

__all__ = [
    "get_connection",
    "transaction",
    "ensure_schema",
    "generate_seed_entries",
    "table_exists",
    "HabitStore",
    "DatabaseError",
    "IntegrityError",
    "NotFoundError",
    "StorageUnavailableError",
]
