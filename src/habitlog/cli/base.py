from __future__ import annotations

import logging
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models import Entry
from ..validation import format_date

_LOGGING_CONFIGURED = False


def configure_logging(level: int = logging.INFO, log_path: Path | None = None) -> None:
    """Configure CLI-wide logging once.

    The menu owns the terminal, so the shell sends log records to a file
    when log_path is given. Safe to call multiple times; only configures on
    first call.

    Args:
        level: Logging level (defaults to INFO).
        log_path: File to append log records to. Logs to stderr if None.

    Side Effects:
        - Configures Python logging module globally.
        - Creates the log file's parent directory.
        - Sets module-level flag to prevent reconfiguration.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    handler_kwargs: dict[str, object] = {}
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler_kwargs = {"filename": str(log_path), "encoding": "utf-8"}

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        **handler_kwargs,
    )
    _LOGGING_CONFIGURED = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger hooked into the shared CLI configuration."""
    return logging.getLogger(name)


@contextmanager
def handle_errors(
    operation: str,
    *,
    logger: logging.Logger | None = None,
) -> Generator[None, None, None]:
    """Provide consistent exception handling for CLI operations.

    Catches anything the operation raises, logs it with traceback, shows a
    short red message and exits with code 1. typer.Exit passes through.

    Args:
        operation: Human-readable operation name for error messages.
        logger: Logger instance. Defaults to module logger if None.

    Raises:
        typer.Exit: With code 1 on any other exception.

    User Output:
        - Prints "✗ {operation} failed: {exc}" in red via typer.secho().
    """
    logger = logger or get_logger(__name__)
    try:
        yield
    except typer.Exit:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error during %s", operation)
        typer.secho(f"✗ {operation} failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc


def entries_table(entries: Iterable[Entry], *, title: str = "Habit Records") -> Table:
    """Build a rich table with one row per entry, dates in canonical form."""
    table = Table(title=title)
    table.add_column("Id", justify="right")
    table.add_column("Date")
    table.add_column("Habit")
    table.add_column("Quantity", justify="right")
    table.add_column("Units")
    for entry in entries:
        table.add_row(
            str(entry.id),
            format_date(entry.date),
            Text(entry.habit_name),
            str(entry.quantity),
            Text(entry.units),
        )
    return table


def render_entries(console: Console, entries: list[Entry]) -> None:
    """Print entries as a table, or a notice when there are none."""
    if not entries:
        console.print("No records found.")
        return
    console.print(entries_table(entries))
