"""Typed record shapes passed between the shell, validation and the store."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any


class EntryField(Enum):
    """Editable fields of an entry, keyed by the menu digit that selects them."""

    DATE = "0"
    NAME = "1"
    QUANTITY = "2"
    UNITS = "3"

    @property
    def attribute(self) -> str:
        """Name of the `Entry` attribute this field replaces."""
        return _FIELD_ATTRIBUTES[self]

    @property
    def label(self) -> str:
        return _FIELD_LABELS[self]


_FIELD_ATTRIBUTES = {
    EntryField.DATE: "date",
    EntryField.NAME: "habit_name",
    EntryField.QUANTITY: "quantity",
    EntryField.UNITS: "units",
}

_FIELD_LABELS = {
    EntryField.DATE: "Habit Date",
    EntryField.NAME: "Habit Name",
    EntryField.QUANTITY: "Habit Quantity",
    EntryField.UNITS: "Habit Units",
}


@dataclass(frozen=True)
class Entry:
    """One dated, quantified habit record.

    `id` is None until the store assigns one. Invariants are checked on
    construction so an invalid entry never reaches the store.

    Raises:
        ValueError: If habit_name or units is blank, or quantity is not a
            positive integer.
    """

    date: date
    habit_name: str
    quantity: int
    units: str
    id: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.date, date):
            msg = f"date must be a datetime.date, got {type(self.date).__name__}"
            raise ValueError(msg)
        if not self.habit_name or not self.habit_name.strip():
            msg = "habit_name must not be blank"
            raise ValueError(msg)
        if not self.units or not self.units.strip():
            msg = "units must not be blank"
            raise ValueError(msg)
        # bool is an int subclass; reject it explicitly
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            msg = f"quantity must be an integer, got {self.quantity!r}"
            raise ValueError(msg)
        if self.quantity <= 0:
            msg = f"quantity must be greater than zero, got {self.quantity}"
            raise ValueError(msg)

    def with_field(self, field: EntryField, value: Any) -> Entry:
        """Return a copy with one editable field replaced."""
        return replace(self, **{field.attribute: value})

    def with_id(self, entry_id: int) -> Entry:
        return replace(self, id=entry_id)
