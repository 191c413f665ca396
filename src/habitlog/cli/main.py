from __future__ import annotations

import typer

from .. import global_config as g
from ..database import HabitStore, StorageUnavailableError
from .base import configure_logging, get_logger, handle_errors
from .menu import HabitShell

logger = get_logger(__name__)

app = typer.Typer(
    help="Console habit tracker",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)


@app.command()
def run() -> None:
    """Open the habit database and start the interactive menu.

    The database location is fixed (global_config.DB_PATH); the menu is the
    whole interface.

    Side Effects:
        - Creates and seeds the database on first run.
        - Appends log records to global_config.LOG_PATH.
        - Exits with code 1 if the database cannot be opened.
    """
    configure_logging(log_path=g.LOG_PATH)
    try:
        store = HabitStore.open(g.DB_PATH)
    except StorageUnavailableError as exc:
        logger.error("Failed to connect to the database: %s", exc)
        typer.secho(f"✗ Failed to connect to the database: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc

    typer.echo("Connected to the database.")
    with handle_errors("habit tracker session", logger=logger):
        HabitShell(store).run()


def main() -> None:
    """Main entry point for the habitlog console script.

    Side Effects:
        - Runs the interactive menu until the operator exits.
        - May exit with non-zero code on errors.
    """
    app()


if __name__ == "__main__":
    main()
