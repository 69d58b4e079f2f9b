"""Load and save a TaskStore as a JSON journal file.

The journal is a JSON array of task objects in insertion order:

    [
      {"text": "Buy groceries", "created_at": "2024-01-01T10:00:00+00:00", "completed_at": null}
    ]

A missing or empty file is a journal with no tasks yet.
"""

import json
from pathlib import Path
from typing import Any

from task_journal.errors import CorruptJournal, IoFailure
from task_journal.logging import Loggers
from task_journal.persistence._utils import atomic_write_json
from task_journal.tasks.models import Task
from task_journal.tasks.store import TaskStore

logger = Loggers.persistence()


class JournalFile:
    """Adapter between a journal path on disk and a TaskStore.

    Example:
        >>> journal = JournalFile("~/.task-journal.json")
        >>> store = journal.load()
        >>> store.add("Buy milk")
        >>> journal.save(store)
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> TaskStore:
        """Read the journal into a new TaskStore.

        Returns:
            A store holding the decoded tasks in stored order, or an
            empty store if the file does not exist or is blank.

        Raises:
            CorruptJournal: If the contents are not a valid task list.
            IoFailure: If the file exists but cannot be read.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("journal_missing", path=str(self.path))
            return TaskStore()
        except UnicodeDecodeError as e:
            raise CorruptJournal(self.path, f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise IoFailure(self.path, "read", e.strerror or str(e)) from e

        if not raw.strip():
            logger.debug("journal_empty", path=str(self.path))
            return TaskStore()

        tasks = self._decode(raw)
        logger.debug("journal_loaded", path=str(self.path), tasks=len(tasks))
        return TaskStore(tasks)

    def save(self, store: TaskStore) -> None:
        """Overwrite the journal with the store's full task sequence.

        Raises:
            IoFailure: If the file cannot be written, including when its
                parent directory does not exist.
        """
        data = [task.to_dict() for task in store.tasks]
        try:
            atomic_write_json(self.path, data)
        except OSError as e:
            raise IoFailure(self.path, "write", e.strerror or str(e)) from e
        logger.debug("journal_saved", path=str(self.path), tasks=len(data))

    def _decode(self, raw: str) -> list[Task]:
        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptJournal(self.path, f"{e.msg} at line {e.lineno} column {e.colno}") from e
        except RecursionError as e:
            raise CorruptJournal(self.path, "nesting too deep") from e

        if not isinstance(data, list):
            raise CorruptJournal(
                self.path, f"expected a JSON array of tasks, got {type(data).__name__}"
            )

        tasks: list[Task] = []
        for index, entry in enumerate(data):
            try:
                tasks.append(Task.from_dict(entry))
            except ValueError as e:
                raise CorruptJournal(self.path, f"entry {index}: {e}") from e
        return tasks


def load(path: str | Path) -> TaskStore:
    """Load the journal at ``path``. See JournalFile.load."""
    return JournalFile(path).load()


def save(path: str | Path, store: TaskStore) -> None:
    """Save ``store`` to the journal at ``path``. See JournalFile.save."""
    JournalFile(path).save(store)
