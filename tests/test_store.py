"""Tests for HabitStore CRUD and initialization."""

from __future__ import annotations

import random
import re
import sqlite3
from datetime import date
from pathlib import Path

import pytest

from habitlog.database import DatabaseError, HabitStore, NotFoundError, StorageUnavailableError
from habitlog.models import Entry, EntryField


def _jumping() -> Entry:
    return Entry(date=date(2023, 8, 1), habit_name="jumping", quantity=27, units="minutes")


@pytest.mark.integration
def test_add_then_get_returns_same_fields(store: HabitStore) -> None:
    added = store.add(_jumping())

    assert added.id is not None
    fetched = store.get_by_id(added.id)
    assert fetched == added
    assert fetched.with_id(0) == _jumping().with_id(0)


@pytest.mark.integration
def test_ids_are_unique(store: HabitStore) -> None:
    ids = [store.add(_jumping()).id for _ in range(3)]
    assert len(set(ids)) == 3


@pytest.mark.integration
def test_add_ignores_existing_id(store: HabitStore) -> None:
    first = store.add(_jumping())
    second = store.add(first)
    assert second.id != first.id
    assert len(store.list_all()) == 2


@pytest.mark.integration
def test_list_all_contains_one_new_row(seeded_store: HabitStore) -> None:
    before = seeded_store.list_all()
    assert all(e.habit_name != "jumping" for e in before)

    seeded_store.add(_jumping())
    after = seeded_store.list_all()

    assert len(after) == len(before) + 1
    matches = [e for e in after if e.habit_name == "jumping"]
    assert len(matches) == 1
    assert matches[0].quantity == 27


@pytest.mark.integration
def test_list_all_empty(store: HabitStore) -> None:
    assert store.list_all() == []


@pytest.mark.integration
def test_missing_id(store: HabitStore) -> None:
    assert store.exists(42) is False
    with pytest.raises(NotFoundError):
        store.get_by_id(42)


@pytest.mark.integration
@pytest.mark.parametrize("raw", ["abc", "1.0", "", "1; DROP TABLE habits"])
def test_non_integer_id(store: HabitStore, raw: str) -> None:
    store.add(_jumping())
    assert store.exists(raw) is False
    with pytest.raises(NotFoundError):
        store.get_by_id(raw)


@pytest.mark.integration
def test_exists_accepts_id_text(store: HabitStore) -> None:
    added = store.add(_jumping())
    assert store.exists(str(added.id)) is True
    assert store.exists(added.id) is True


@pytest.mark.integration
def test_delete_removes_entry(store: HabitStore) -> None:
    added = store.add(_jumping())

    assert store.delete(added.id) is True
    assert store.exists(added.id) is False


@pytest.mark.integration
def test_delete_missing_reports_failure(store: HabitStore) -> None:
    assert store.delete(999) is False
    assert store.delete("abc") is False


@pytest.mark.integration
def test_update_replaces_quantity_only(store: HabitStore) -> None:
    added = store.add(_jumping())

    assert store.update(added.with_field(EntryField.QUANTITY, 50)) is True

    fetched = store.get_by_id(added.id)
    assert fetched.quantity == 50
    assert (fetched.date, fetched.habit_name, fetched.units) == (
        added.date,
        added.habit_name,
        added.units,
    )


@pytest.mark.integration
def test_update_replaces_every_field(store: HabitStore) -> None:
    added = store.add(_jumping())
    replacement = Entry(
        id=added.id, date=date(2024, 12, 31), habit_name="rowing", quantity=3, units="kilometers"
    )

    assert store.update(replacement) is True
    assert store.get_by_id(added.id) == replacement


@pytest.mark.integration
def test_update_without_id_fails(store: HabitStore) -> None:
    assert store.update(_jumping()) is False


@pytest.mark.integration
def test_update_missing_row_fails(store: HabitStore) -> None:
    assert store.update(_jumping().with_id(321)) is False


@pytest.mark.integration
def test_write_errors_collapse_to_false(store: HabitStore, sqlite_path: Path) -> None:
    added = store.add(_jumping())
    other = sqlite3.connect(sqlite_path)
    try:
        other.execute("DROP TABLE habits")
        other.commit()
    finally:
        other.close()

    assert store.update(added.with_field(EntryField.QUANTITY, 5)) is False
    assert store.delete(added.id) is False


@pytest.mark.integration
def test_user_text_is_bound_not_interpolated(store: HabitStore) -> None:
    hostile = "x'); DROP TABLE habits; --"
    added = store.add(
        Entry(date=date(2023, 1, 2), habit_name=hostile, quantity=1, units="o'clock")
    )

    fetched = store.get_by_id(added.id)
    assert fetched.habit_name == hostile
    assert fetched.units == "o'clock"
    assert len(store.list_all()) == 1


@pytest.mark.integration
def test_dates_are_stored_month_first(store: HabitStore, sqlite_path: Path) -> None:
    store.add(Entry(date=date(2023, 12, 31), habit_name="reading", quantity=20, units="minutes"))

    raw = sqlite3.connect(sqlite_path)
    try:
        (stored,) = raw.execute("SELECT date FROM habits").fetchone()
    finally:
        raw.close()
    assert stored == "12-31-2023"
    assert re.fullmatch(r"\d{2}-\d{2}-\d{4}", stored)


@pytest.mark.integration
def test_open_twice_does_not_reseed(sqlite_path: Path) -> None:
    with HabitStore.open(sqlite_path, rng=random.Random(3), seed_count=5) as first:
        first_rows = first.list_all()
    with HabitStore.open(sqlite_path, rng=random.Random(4), seed_count=5) as second:
        second_rows = second.list_all()

    assert len(first_rows) == 5
    assert second_rows == first_rows


@pytest.mark.integration
def test_open_creates_default_seed(seeded_store: HabitStore) -> None:
    assert len(seeded_store.list_all()) == 100


@pytest.mark.integration
def test_open_defaults_to_configured_path(project_root: Path) -> None:
    with HabitStore.open(seed_count=0) as habit_store:
        assert habit_store.db_path == project_root / "db" / "habits.sqlite"
    assert (project_root / "db" / "habits.sqlite").exists()


@pytest.mark.integration
def test_open_directory_is_unavailable(project_root: Path) -> None:
    with pytest.raises(StorageUnavailableError):
        HabitStore.open(project_root / "db")


@pytest.mark.integration
def test_closed_store_raises_database_error(sqlite_path: Path) -> None:
    with HabitStore.open(sqlite_path, seed_count=0) as habit_store:
        pass
    with pytest.raises(DatabaseError):
        habit_store.list_all()


@pytest.mark.integration
def test_year_below_1000_is_stored_padded_and_read_back(store: HabitStore, sqlite_path: Path) -> None:
    added = store.add(Entry(date=date(999, 1, 1), habit_name="reading", quantity=5, units="hours"))

    raw = sqlite3.connect(sqlite_path)
    try:
        (stored,) = raw.execute("SELECT date FROM habits").fetchone()
    finally:
        raw.close()
    assert stored == "01-01-0999"
    assert store.get_by_id(added.id).date == date(999, 1, 1)
    assert [entry.date for entry in store.list_all()] == [date(999, 1, 1)]


@pytest.mark.integration
@pytest.mark.parametrize("huge", [10**20, -(10**20), "99999999999999999999", 2**63])
def test_ids_beyond_sqlite_integer_range_are_absent(store: HabitStore, huge: int | str) -> None:
    added = store.add(_jumping())

    assert store.exists(huge) is False
    with pytest.raises(NotFoundError):
        store.get_by_id(huge)
    assert store.delete(huge) is False
    assert store.update(added.with_id(10**20).with_field(EntryField.QUANTITY, 50)) is False
    assert store.get_by_id(added.id) == added


@pytest.mark.integration
def test_largest_sqlite_id_is_still_looked_up(store: HabitStore) -> None:
    assert store.exists(2**63 - 1) is False
    assert store.delete(2**63 - 1) is False


@pytest.mark.integration
@pytest.mark.parametrize("missing", [42, "abc"])
def test_not_found_names_the_requested_entry(store: HabitStore, missing: int | str) -> None:
    with pytest.raises(NotFoundError, match="No habit entry matches id") as caught:
        store.get_by_id(missing)
    assert caught.value.entry_id == missing
