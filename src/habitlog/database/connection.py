"""Database connection helpers.

A small, synchronous API for opening the single long-lived SQLite
connection the tracker uses, plus a transaction block for multi-statement
writes such as table creation and seeding.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from .. import global_config as g
from .errors import StorageUnavailableError

logger = logging.getLogger(__name__)


def _configure_connection(conn: sqlite3.Connection) -> None:
    """Apply the row factory used by the query helpers.

    Args:
        conn: SQLite connection to configure.

    Side Effects:
        - Sets row_factory to sqlite3.Row for dict-like access.
    """
    conn.row_factory = sqlite3.Row
    # Default DELETE journal mode: single user, no -wal/-shm files wanted.


def get_connection(db_path: Path | str | None = None) -> sqlite3.Connection:
    """Return a configured SQLite connection.

    Args:
        db_path: Path to SQLite database file. Defaults to
            global_config.DB_PATH.

    Returns:
        Configured SQLite connection ready for use.

    Raises:
        StorageUnavailableError: If the parent directory cannot be created
            or SQLite refuses to open the file.

    Logs:
        - DEBUG: "Opening SQLite database at {path}" when creating connection.
        - ERROR: "Unable to open SQLite database at {path}" on failure.

    Side Effects:
        - Creates parent directory if it doesn't exist.
        - Creates database file if it doesn't exist.
    """
    resolved = Path(db_path) if db_path is not None else g.DB_PATH

    logger.debug("Opening SQLite database at %s", resolved)
    try:
        resolved.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(resolved))
        _configure_connection(conn)
    except (OSError, sqlite3.Error) as exc:
        logger.exception("Unable to open SQLite database at %s", resolved)
        msg = f"Unable to open database at {resolved}: {exc}"
        raise StorageUnavailableError(msg) from exc
    return conn


@contextlib.contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Commit the block on success, roll it back on error.

    The connection is not closed; the store owns its lifetime.

    Args:
        conn: Open connection to run the block on.

    Yields:
        The same connection.

    Logs:
        - DEBUG: "Transaction committed" on success.
        - ERROR: "Transaction rolled back due to error" on failure.
    """
    try:
        yield conn
        conn.commit()
        logger.debug("Transaction committed")
    except Exception:
        logger.exception("Transaction rolled back due to error")
        conn.rollback()
        raise
