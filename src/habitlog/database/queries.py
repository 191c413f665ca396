"""Parameterized query helpers.

Every helper takes SQL with ``?`` placeholders and a separate parameter
tuple; values are never formatted into SQL text.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Sequence
from typing import Any

logger = logging.getLogger(__name__)

Params = Sequence[Any]


def run(conn: sqlite3.Connection, sql: str, params: Params = ()) -> sqlite3.Cursor:
    """Execute one statement and return its cursor.

    Raises:
        sqlite3.Error: If execution fails.

    Logs:
        - DEBUG: the first 80 characters of the statement.
        - ERROR: "Query execution failed" with traceback on failure.
    """
    try:
        cursor = conn.execute(sql, tuple(params))
    except sqlite3.Error:
        logger.exception("Query execution failed: %s", sql[:80])
        raise
    logger.debug("Executed query: %s", sql[:80])
    return cursor


def fetch_one(conn: sqlite3.Connection, sql: str, params: Params = ()) -> dict[str, Any] | None:
    """Return the first row as a dict, or None when there is none."""
    row = run(conn, sql, params).fetchone()
    return dict(row) if row is not None else None


def fetch_all(conn: sqlite3.Connection, sql: str, params: Params = ()) -> list[dict[str, Any]]:
    """Return every row as a list of dicts, loaded eagerly."""
    return [dict(row) for row in run(conn, sql, params).fetchall()]


def fetch_value(conn: sqlite3.Connection, sql: str, params: Params = ()) -> Any:
    """Return the first column of the first row, or None."""
    row = run(conn, sql, params).fetchone()
    return row[0] if row is not None else None


def execute_write(conn: sqlite3.Connection, sql: str, params: Params = ()) -> sqlite3.Cursor:
    """Execute INSERT/UPDATE/DELETE and return the cursor.

    The cursor exposes ``rowcount`` and ``lastrowid`` for callers that need
    them.

    Logs:
        - DEBUG: "Write affected {rowcount} rows".
    """
    cursor = run(conn, sql, params)
    logger.debug("Write affected %s rows", cursor.rowcount)
    return cursor
