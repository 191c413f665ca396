"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting constants that many modules
can import.
"""

from datetime import date
from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent
# From src/habitlog/global_config.py, go up two levels: src/habitlog -> src -> repo root
PROJECT_ROOT: Path = PACKAGE_ROOT.parent.parent

# Core Names
PROJECT_NAME = "habitlog"

# Database location (fixed; the shell takes no flags)
DB_DIR: Path = PROJECT_ROOT / "db"
DB_PATH: Path = DB_DIR / "habits.sqlite"
ENTRIES_TABLE = "habits"

# Logs
LOGS_DIR: Path = PROJECT_ROOT / "logs"
LOG_PATH: Path = LOGS_DIR / f"{PROJECT_NAME}.log"

# Dates. Order matters: the first layout that parses wins.
CANONICAL_DATE_FORMAT = "%m-%d-%Y"
DATE_FORMATS: tuple[str, ...] = ("%m-%d-%Y", "%d-%m-%Y")

# Seed data written once when the entries table is first created
SEED_ENTRY_COUNT = 100
SEED_START_DATE = date(2020, 1, 1)
SEED_HABIT_NAMES: tuple[str, ...] = (
    "swimming",
    "running",
    "walking",
    "cycling",
    "working",
    "cooking",
    "coding",
    "reading",
)
SEED_UNITS: tuple[str, ...] = ("minutes", "hours", "miles", "kilometers")
# Half-open: randrange(1, 60)
SEED_QUANTITY_RANGE: tuple[int, int] = (1, 60)
