from __future__ import annotations

import io
import random
from collections.abc import Iterable, Iterator
from pathlib import Path

import pytest
from rich.console import Console

from habitlog import global_config as g
from habitlog.database import HabitStore


class ScriptedInput:
    """Stand-in for operator input: returns queued lines in order.

    Records every message it was called with so tests can assert on
    re-prompts. Fails loudly when a flow asks for more input than scripted.
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)
        self.messages: list[str] = []

    def __call__(self, message: str | None = None) -> str:
        if message is not None:
            self.messages.append(message)
        if not self._lines:
            raise AssertionError("Scripted input exhausted")
        return self._lines.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._lines)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    A dedicated temp root directory for each test.
    All filesystem writes in tests should be under this root (or tmp_path directly).
    """
    root = tmp_path / "proj"
    (root / "db").mkdir(parents=True)
    (root / "logs").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def chdir_to_project_root(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically change working directory to project_root for all tests.
    This ensures relative-path operations go into the temp directory by default.
    """
    monkeypatch.chdir(project_root)


@pytest.fixture(autouse=True)
def isolated_paths(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Point the fixed database and log locations at the temp project root so no
    test can touch a real habits database.
    """
    monkeypatch.setattr(g, "DB_PATH", project_root / "db" / "habits.sqlite")
    monkeypatch.setattr(g, "LOG_PATH", project_root / "logs" / "habitlog.log")


@pytest.fixture
def sqlite_path(project_root: Path) -> Path:
    """
    On-disk SQLite DB under the temp project root (more realistic than :memory:).
    """
    return project_root / "db" / "test.sqlite"


@pytest.fixture
def store(sqlite_path: Path) -> Iterator[HabitStore]:
    """An empty store (no seed rows), closed after the test."""
    habit_store = HabitStore.open(sqlite_path, seed_count=0)
    yield habit_store
    habit_store.close()


@pytest.fixture
def seeded_store(sqlite_path: Path) -> Iterator[HabitStore]:
    """A store seeded with the default number of demo entries from a fixed seed."""
    habit_store = HabitStore.open(sqlite_path, rng=random.Random(1234))
    yield habit_store
    habit_store.close()


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output: io.StringIO) -> Console:
    return Console(file=console_output, width=120, color_system=None)


@pytest.fixture
def scripted() -> type[ScriptedInput]:
    """Factory for scripted operator input: ``scripted(["08-01-2023", "E"])``."""
    return ScriptedInput
