"""Shared test fixtures and utilities for task-journal tests.

Provides:
- MockContext for isolating tests from global settings and the user's home
- A deterministic clock for TaskStore timestamps
- Consoles that capture CLI output
"""

import io
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Generator

import pytest
from rich.console import Console

from task_journal.config import JournalSettings, reload_settings, set_settings
from task_journal.logging import configure_logging
from task_journal.tasks import TaskStore

BASE_TIME = datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Pointing HOME at a temporary directory
    - Clearing TASK_JOURNAL_* environment variables
    - Installing settings whose journal lives in the temporary directory

    Usage:
        with MockContext() as ctx:
            settings = ctx.settings
            journal = ctx.journal_file
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: JournalSettings | None = None
        self._original_env: dict[str, str | None] = {}

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        home = Path(self._temp_dir.name)

        env_vars = [name for name in os.environ if name.startswith("TASK_JOURNAL_")]
        for var in [*env_vars, "HOME"]:
            self._original_env[var] = os.environ.get(var)
            os.environ.pop(var, None)
        os.environ["HOME"] = str(home)

        self._settings_kwargs.setdefault("journal_file", home / "journal.json")
        self._settings = JournalSettings(**self._settings_kwargs)
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        for var, value in self._original_env.items():
            if value is None:
                os.environ.pop(var, None)
            else:
                os.environ[var] = value

        reload_settings()

        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> JournalSettings:
        """Get the test settings instance."""
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def home(self) -> Path:
        """Get the temporary home directory."""
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)

    @property
    def journal_file(self) -> Path:
        return self.settings.journal_file


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Keep structlog at the default warning level on stderr."""
    configure_logging()


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated test context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock that advances one minute per call, starting at BASE_TIME."""
    ticks = iter(range(10_000))

    def now() -> datetime:
        return BASE_TIME + timedelta(minutes=next(ticks))

    return now


@pytest.fixture
def store(clock: Callable[[], datetime]) -> TaskStore:
    """Empty store with a deterministic clock."""
    return TaskStore(clock=clock)


@pytest.fixture
def journal_path(tmp_path: Path) -> Path:
    """Path for a journal file that does not exist yet."""
    return tmp_path / "journal.json"


class CapturedConsoles:
    """Pair of rich consoles writing into in-memory buffers."""

    def __init__(self) -> None:
        self.out = Console(file=io.StringIO(), width=200, color_system=None)
        self.err = Console(file=io.StringIO(), width=200, color_system=None)

    @property
    def stdout(self) -> str:
        return self.out.file.getvalue()

    @property
    def stderr(self) -> str:
        return self.err.file.getvalue()


@pytest.fixture
def consoles() -> CapturedConsoles:
    return CapturedConsoles()
