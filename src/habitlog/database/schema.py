"""Entries table schema and first-run seeding.

The schema is created only when the entries table is absent, and demo
entries are written in the same transaction. An existing table is left
untouched, so opening a populated database twice neither recreates the
table nor duplicates the seed rows.
"""

from __future__ import annotations

import logging
import random
import sqlite3
from datetime import date, timedelta

from .. import global_config as g
from ..models import Entry
from ..validation import format_date
from . import queries
from .connection import transaction

logger = logging.getLogger(__name__)

CREATE_ENTRIES_TABLE = f"""
CREATE TABLE {g.ENTRIES_TABLE} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date TEXT NOT NULL,
    habit_name TEXT NOT NULL,
    quantity INTEGER,
    units TEXT
)
"""

INSERT_ENTRY = f"INSERT INTO {g.ENTRIES_TABLE} (date, habit_name, quantity, units) VALUES (?, ?, ?, ?)"  # noqa: S608


def table_exists(conn: sqlite3.Connection, table: str = g.ENTRIES_TABLE) -> bool:
    """Return True if table is present in sqlite_master."""
    found = queries.fetch_value(
        conn,
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
        (table,),
    )
    return found is not None


def random_date(rng: random.Random, start: date, end: date) -> date:
    """Pick a date uniformly from the closed range [start, end]."""
    span = (end - start).days
    if span < 0:
        msg = f"Seed range is empty: {start} is after {end}"
        raise ValueError(msg)
    return start + timedelta(days=rng.randint(0, span))


def generate_seed_entries(
    rng: random.Random,
    count: int = g.SEED_ENTRY_COUNT,
    *,
    start: date = g.SEED_START_DATE,
    end: date | None = None,
) -> list[Entry]:
    """Build randomized demo entries.

    Args:
        rng: Generator that drives every random choice. Pass a seeded
            instance for reproducible output.
        count: Number of entries to build.
        start: Earliest possible date.
        end: Latest possible date. Defaults to today.

    Returns:
        Entries without ids, names and units drawn from the seed
        vocabularies, quantity in SEED_QUANTITY_RANGE (upper bound
        exclusive).
    """
    last = end or date.today()
    low, high = g.SEED_QUANTITY_RANGE
    return [
        Entry(
            date=random_date(rng, start, last),
            habit_name=rng.choice(g.SEED_HABIT_NAMES),
            quantity=rng.randrange(low, high),
            units=rng.choice(g.SEED_UNITS),
        )
        for _ in range(count)
    ]


def ensure_schema(
    conn: sqlite3.Connection,
    *,
    rng: random.Random | None = None,
    seed_count: int = g.SEED_ENTRY_COUNT,
) -> bool:
    """Create and seed the entries table if it does not exist yet.

    Args:
        conn: Open connection.
        rng: Generator for the seed data. A fresh unseeded instance is
            created when omitted.
        seed_count: Number of demo entries written on creation.

    Returns:
        True if the table was created, False if it already existed.

    Raises:
        sqlite3.Error: If creation or seeding fails (the transaction is
            rolled back).

    Logs:
        - INFO: "Creating {table} table" and "Seeded {n} demo entries".
        - DEBUG: "{table} table already present" when nothing is done.
    """
    if table_exists(conn):
        logger.debug("%s table already present", g.ENTRIES_TABLE)
        return False

    logger.info("Creating %s table", g.ENTRIES_TABLE)
    entries = generate_seed_entries(rng or random.Random(), seed_count)
    with transaction(conn):
        # Explicit BEGIN so the DDL and the seed rows commit or roll back together.
        queries.run(conn, "BEGIN")
        queries.run(conn, CREATE_ENTRIES_TABLE)
        conn.executemany(
            INSERT_ENTRY,
            [(format_date(e.date), e.habit_name, e.quantity, e.units) for e in entries],
        )
    logger.info("Seeded %d demo entries", len(entries))
    return True
