"""Database-specific exception types for habitlog."""

from __future__ import annotations

import sqlite3
from typing import Any


class DatabaseError(Exception):
    """Base exception for database-related errors."""


class StorageUnavailableError(DatabaseError):
    """Raised when the SQLite file cannot be opened or inspected."""


class IntegrityError(DatabaseError):
    """Raised when a constraint violation occurs."""


class NotFoundError(DatabaseError):
    """Raised when no habit entry has the requested id.

    The id is kept as given (int or operator text) on ``entry_id``.
    """

    def __init__(self, entry_id: object) -> None:
        super().__init__(f"No habit entry matches id {entry_id!r}")
        self.entry_id = entry_id


def from_sqlite_error(error: sqlite3.Error) -> DatabaseError:
    """Translate a sqlite3 failure into the habitlog error tree.

    Constraint violations (NOT NULL on date or habit_name) become
    IntegrityError; everything else is a plain DatabaseError carrying the
    SQLite message.
    """
    if isinstance(error, sqlite3.IntegrityError):
        return IntegrityError(str(error))
    return DatabaseError(str(error))


def ensure_found(row: Any, entry_id: object) -> Any:
    # A lookup that was never run (unusable id) arrives here as None too.
    if row is None:
        raise NotFoundError(entry_id)
    return row
