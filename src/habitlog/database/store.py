"""Record store for habit entries.

`HabitStore` owns the single SQLite connection for the lifetime of the
process and is the only code that reads or writes the entries table. All
values reach SQLite through ``?`` parameter binding.

Failure policy:
- Opening: `StorageUnavailableError` (fatal for the shell).
- `get_by_id`: `NotFoundError` when no row has the id.
- `add`: project `DatabaseError` / `IntegrityError` on write errors.
- `update` / `delete`: any failure is logged and collapsed to ``False``.
"""

from __future__ import annotations

import logging
import random
import sqlite3
from pathlib import Path
from types import TracebackType
from typing import Any

from .. import global_config as g
from ..models import Entry
from ..validation import format_date, parse_int, parse_stored_date
from . import queries
from .connection import get_connection, transaction
from .errors import StorageUnavailableError, ensure_found, from_sqlite_error
from .schema import ensure_schema

logger = logging.getLogger(__name__)

_TABLE = g.ENTRIES_TABLE
_COLUMNS = "id, date, habit_name, quantity, units"

SELECT_ALL = f"SELECT {_COLUMNS} FROM {_TABLE}"  # noqa: S608
SELECT_BY_ID = f"SELECT {_COLUMNS} FROM {_TABLE} WHERE id = ?"  # noqa: S608
COUNT_BY_ID = f"SELECT COUNT(*) FROM {_TABLE} WHERE id = ?"  # noqa: S608
INSERT = f"INSERT INTO {_TABLE} (date, habit_name, quantity, units) VALUES (?, ?, ?, ?)"  # noqa: S608
UPDATE = f"UPDATE {_TABLE} SET date = ?, habit_name = ?, quantity = ?, units = ? WHERE id = ?"  # noqa: S608
DELETE = f"DELETE FROM {_TABLE} WHERE id = ?"  # noqa: S608

SQLITE_MIN_INT = -(2**63)
SQLITE_MAX_INT = 2**63 - 1


def _row_to_entry(row: dict[str, Any]) -> Entry:
    return Entry(
        id=row["id"],
        date=parse_stored_date(row["date"]),
        habit_name=row["habit_name"],
        quantity=row["quantity"],
        units=row["units"],
    )


def _coerce_id(entry_id: int | str) -> int | None:
    if isinstance(entry_id, bool):
        return None
    key = entry_id if isinstance(entry_id, int) else parse_int(entry_id)
    # SQLite INTEGER is a signed 64-bit value; larger ints cannot be bound.
    if key is None or not SQLITE_MIN_INT <= key <= SQLITE_MAX_INT:
        return None
    return key


class HabitStore:
    """Durable CRUD over habit entries.

    Use `HabitStore.open` rather than the constructor; it creates the
    schema and seed data on first use. Instances are context managers and
    close their connection on exit.
    """

    def __init__(self, conn: sqlite3.Connection, db_path: Path) -> None:
        self._conn = conn
        self.db_path = db_path

    @classmethod
    def open(
        cls,
        db_path: Path | str | None = None,
        *,
        rng: random.Random | None = None,
        seed_count: int = g.SEED_ENTRY_COUNT,
    ) -> HabitStore:
        """Open (or create) the database and make sure the table exists.

        Args:
            db_path: SQLite file location. Defaults to global_config.DB_PATH.
            rng: Generator used only if the table has to be seeded.
            seed_count: Number of demo entries written on first creation.

        Returns:
            A ready store holding an open connection.

        Raises:
            StorageUnavailableError: If the file cannot be opened or the
                schema cannot be checked or created.

        Logs:
            - INFO: "Opened habit store at {path}".
        """
        resolved = Path(db_path) if db_path is not None else g.DB_PATH
        conn = get_connection(resolved)
        try:
            ensure_schema(conn, rng=rng, seed_count=seed_count)
        except sqlite3.Error as exc:
            conn.close()
            msg = f"Unable to prepare database at {resolved}: {exc}"
            raise StorageUnavailableError(msg) from exc
        logger.info("Opened habit store at %s", resolved)
        return cls(conn, resolved)

    def list_all(self) -> list[Entry]:
        """Return every entry in the table's natural scan order."""
        try:
            rows = queries.fetch_all(self._conn, SELECT_ALL)
        except sqlite3.Error as exc:
            raise from_sqlite_error(exc) from exc
        return [_row_to_entry(row) for row in rows]

    def get_by_id(self, entry_id: int | str) -> Entry:
        """Return the entry with entry_id.

        Raises:
            NotFoundError: If no row has that id (or the id is not an
                integer).
        """
        key = _coerce_id(entry_id)
        row = None
        if key is not None:
            try:
                row = queries.fetch_one(self._conn, SELECT_BY_ID, (key,))
            except sqlite3.Error as exc:
                raise from_sqlite_error(exc) from exc
        return _row_to_entry(ensure_found(row, entry_id))

    def exists(self, entry_id: int | str) -> bool:
        """Return whether a row has entry_id; False for non-integer text."""
        key = _coerce_id(entry_id)
        if key is None:
            return False
        try:
            count = queries.fetch_value(self._conn, COUNT_BY_ID, (key,))
        except sqlite3.Error as exc:
            raise from_sqlite_error(exc) from exc
        return bool(count)

    def add(self, entry: Entry) -> Entry:
        """Insert entry and return a copy carrying the assigned id.

        Any id already on entry is ignored.

        Raises:
            IntegrityError: On a constraint violation.
            DatabaseError: If the insert fails for another reason.

        Logs:
            - DEBUG: "Added entry {id}".
        """
        params = (format_date(entry.date), entry.habit_name, entry.quantity, entry.units)
        try:
            with transaction(self._conn):
                cursor = queries.execute_write(self._conn, INSERT, params)
        except sqlite3.Error as exc:
            raise from_sqlite_error(exc) from exc
        new_id = cursor.lastrowid
        logger.debug("Added entry %s", new_id)
        return entry.with_id(new_id)

    def update(self, entry: Entry) -> bool:
        """Replace all four data fields of the row matching entry.id.

        Returns:
            True if exactly that row was rewritten. False if entry has no
            id, no row matched, or SQLite raised; the cause is logged but
            not reported to the caller.
        """
        key = _coerce_id(entry.id) if entry.id is not None else None
        if key is None:
            logger.error("Refusing to update entry with unusable id %r", entry.id)
            return False
        params = (
            format_date(entry.date),
            entry.habit_name,
            entry.quantity,
            entry.units,
            key,
        )
        return self._write(UPDATE, params, action="update", entry_id=key)

    def delete(self, entry_id: int | str) -> bool:
        """Remove the row matching entry_id.

        Returns:
            True if a row was removed, False otherwise (see `update`).
        """
        key = _coerce_id(entry_id)
        if key is None:
            logger.error("Refusing to delete with non-integer id %r", entry_id)
            return False
        return self._write(DELETE, (key,), action="delete", entry_id=key)

    def _write(self, sql: str, params: tuple[Any, ...], *, action: str, entry_id: int) -> bool:
        try:
            cursor = queries.execute_write(self._conn, sql, params)
            self._conn.commit()
        except sqlite3.Error:
            self._conn.rollback()
            logger.exception("Failed to %s entry %s", action, entry_id)
            return False
        if cursor.rowcount != 1:
            logger.warning("No entry %s to %s", entry_id, action)
            return False
        logger.debug("Entry %s: %s ok", entry_id, action)
        return True

    def close(self) -> None:
        """Release the connection. Call once, at shutdown."""
        self._conn.close()
        logger.debug("Closed habit store at %s", self.db_path)

    def __enter__(self) -> HabitStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
