"""Interactive menu shell for the habit tracker.

The shell only gathers raw text, hands it to `habitlog.validation`, builds
entries and calls the store. Input and output are injected so the flows can
be driven by scripted input.
"""

from __future__ import annotations

from collections.abc import Callable

import typer
from rich.console import Console

from ..database import HabitStore
from ..models import Entry, EntryField
from ..validation import (
    is_exit,
    parse_date,
    parse_positive_int,
    require_non_blank,
    select_entry_id,
    select_field,
)
from .base import get_logger, render_entries

logger = get_logger(__name__)

MAIN_MENU = (
    "What do you want to do?\n\n"
    "Type 0 to Close Application\n"
    "Type 1 to View all Records\n"
    "Type 2 to Add a record\n"
    "Type 3 to Delete a record\n"
    "Type 4 to Edit a record"
)

EDIT_MENU = "What part of the entry would you like to edit:\n" + "\n".join(
    f"\tEdit the {field.label} select {field.value} and press enter" for field in EntryField
) + "\n\tOr type E to exit"

CANCELLED_MESSAGE = "Exiting to main menu, press enter to continue"


class HabitShell:
    """Menu loop over a `HabitStore`.

    Args:
        store: Open store; closed when the operator chooses exit.
        read_line: Returns the next line of operator input.
        read_key: Returns a single keypress.
        console: Rich console for output.
    """

    def __init__(
        self,
        store: HabitStore,
        *,
        read_line: Callable[[], str] | None = None,
        read_key: Callable[[], str] | None = None,
        console: Console | None = None,
    ) -> None:
        self.store = store
        self.read_line = read_line or input
        self.read_key = read_key or typer.getchar
        self.console = console or Console()

    def _say(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    def _ask(self, message: str) -> str:
        self._say(message)
        return self.read_line()

    def _pause(self, message: str) -> None:
        self._ask(message)

    def _cancelled(self) -> None:
        logger.debug("Operation cancelled by operator")
        self._pause(CANCELLED_MESSAGE)

    def _read_text(self, message: str) -> str | None:
        raw = require_non_blank(self._ask(message), self._ask)
        if is_exit(raw):
            return None
        return raw

    def run(self) -> None:
        """Show the main menu until the operator selects exit, then close the store."""
        actions: dict[str, tuple[str, Callable[[], object]]] = {
            "1": ("View All Records", self.view_records),
            "2": ("Add a Record", self.add_entry),
            "3": ("Delete a Record", self.delete_entry),
            "4": ("Edit a Record", self.edit_entry),
        }
        try:
            while True:
                self.console.clear()
                self._say(MAIN_MENU)
                selection = self.read_key()
                if selection == "0":
                    self._say("\nClosing application")
                    return
                action = actions.get(selection)
                if action is None:
                    self._pause("\nInvalid selection, press enter to try again")
                    continue
                title, handler = action
                self._say(f"\n{title}")
                handler()
        finally:
            self.store.close()

    def list_entries(self) -> list[Entry]:
        entries = self.store.list_all()
        render_entries(self.console, entries)
        return entries

    def view_records(self) -> list[Entry]:
        entries = self.list_entries()
        self._pause("Press enter to continue")
        return entries

    def add_entry(self) -> Entry | None:
        """Collect date, name, quantity and units, then store a new entry.

        Returns:
            The stored entry, or None if the operator cancelled.
        """
        entry_date = parse_date(
            self._ask("Enter Date completed mm-dd-yyyy (or dd-mm-yyyy), or type 'E' to exit"),
            self._ask,
        )
        if entry_date is None:
            self._cancelled()
            return None

        habit_name = self._read_text("Enter Habit Name, or type 'E' to exit")
        if habit_name is None:
            self._cancelled()
            return None

        quantity = parse_positive_int(
            self._ask("Enter Quantity completed, or type 'E' to exit"),
            self._ask,
        )
        if quantity is None:
            self._cancelled()
            return None

        units = self._read_text("Enter type of Units tracked, or type 'E' to exit")
        if units is None:
            self._cancelled()
            return None

        stored = self.store.add(
            Entry(date=entry_date, habit_name=habit_name, quantity=quantity, units=units)
        )
        logger.info("Added entry %s", stored.id)
        self._pause("New entry added, press enter to continue")
        return stored

    def _choose_entry(self, verb: str) -> Entry | None:
        entries = self.list_entries()
        if not entries:
            self._pause(f"Nothing to {verb}, press enter to continue")
            return None
        by_id = {entry.id: entry for entry in entries}
        entry_id = select_entry_id(
            self._ask(f"Enter the record ID you would like to {verb}, or E to exit"),
            by_id.keys(),
            self._ask,
        )
        if entry_id is None:
            self._cancelled()
            return None
        return by_id[entry_id]

    def delete_entry(self) -> bool:
        """Delete one of the listed entries.

        Returns:
            True if a record was deleted.
        """
        entry = self._choose_entry("delete")
        if entry is None:
            return False
        deleted = self.store.delete(entry.id)
        if deleted:
            self._pause("Record deleted successfully, press enter to continue")
        else:
            self._pause("Failed to delete record, press enter to continue")
        return deleted

    def _read_new_value(self, field: EntryField) -> object | None:
        self._say(f"\nEditing the {field.label}")
        if field is EntryField.DATE:
            return parse_date(self._ask("Enter the new Date, mm-dd-yyyy"), self._ask)
        if field is EntryField.QUANTITY:
            return parse_positive_int(self._ask("Enter the new Quantity"), self._ask)
        if field is EntryField.NAME:
            return self._read_text("Enter the new name")
        return self._read_text("Enter the new Unit")

    def edit_entry(self) -> Entry | None:
        """Replace one field of a listed entry.

        Returns:
            The updated entry, or None if cancelled or the write failed.
        """
        entry = self._choose_entry("edit")
        if entry is None:
            return None

        self._say(EDIT_MENU)
        field = select_field(self.read_line(), self._ask)
        if field is None:
            self._cancelled()
            return None

        value = self._read_new_value(field)
        if value is None:
            self._cancelled()
            return None

        updated = entry.with_field(field, value)
        if not self.store.update(updated):
            self._pause("Unable to update record, press enter to continue")
            return None
        logger.info("Updated %s of entry %s", field.attribute, updated.id)
        self._pause("Record updated, press enter to continue")
        return updated
