"""In-memory task store with position addressing.

Tasks are kept in insertion order and have no IDs. Commands address a
task by its 1-based position in a filtered view (active or completed)
that is recomputed on every call, so completing a task shifts the
positions of the active tasks after it.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable, Iterator

from task_journal.errors import InvalidInput, PositionOutOfRange
from task_journal.logging import Loggers
from task_journal.tasks.models import PositionedTask, Task

logger = Loggers.tasks()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskStore:
    """Ordered collection of journal tasks.

    The store owns its sequence exclusively: ``tasks`` returns a snapshot
    and Task records are immutable, so mutation only happens through
    add(), complete() and edit().

    Example:
        >>> store = TaskStore()
        >>> store.add("Buy groceries")
        >>> store.add("Buy milk")
        >>> store.complete(1)
        >>> [str(entry) for entry in store.list_active()]
        ['1: Buy milk']
    """

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._tasks: list[Task] = list(tasks or [])
        self._clock = clock or _utc_now

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Snapshot of every task in insertion order."""
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def is_empty(self) -> bool:
        """Check if the store has any tasks, active or completed."""
        return not self._tasks

    def add(self, text: str) -> Task:
        """Append a new active task.

        Args:
            text: Task description; must contain non-whitespace characters.

        Returns:
            The created task.

        Raises:
            InvalidInput: If text is empty after trimming.
        """
        _require_text(text)
        task = Task(text=text, created_at=self._clock())
        self._tasks.append(task)
        logger.info("task_added", total=len(self._tasks))
        return task

    def complete(self, position: int) -> Task:
        """Mark the active task at ``position`` as completed.

        Args:
            position: 1-based position in the active view.

        Returns:
            The completed task.

        Raises:
            PositionOutOfRange: If no active task has that position.
        """
        index = self._resolve_active(position)
        task = replace(self._tasks[index], completed_at=self._clock())
        self._tasks[index] = task
        logger.info("task_completed", position=position, remaining=len(self._active_indices()))
        return task

    def edit(self, position: int, new_text: str) -> Task:
        """Replace the text of the active task at ``position``.

        Completed tasks are not addressable here; ``created_at`` and
        ``completed_at`` are left untouched.

        Raises:
            InvalidInput: If new_text is empty after trimming.
            PositionOutOfRange: If no active task has that position.
        """
        _require_text(new_text)
        index = self._resolve_active(position)
        task = replace(self._tasks[index], text=new_text)
        self._tasks[index] = task
        logger.info("task_edited", position=position)
        return task

    def active_at(self, position: int) -> Task:
        """Look up the active task at ``position`` without changing anything.

        Raises:
            PositionOutOfRange: If no active task has that position.
        """
        return self._tasks[self._resolve_active(position)]

    def list_active(self) -> list[PositionedTask]:
        """Active tasks in insertion order, numbered from 1."""
        return _number(t for t in self._tasks if not t.is_completed)

    def list_completed(self) -> list[PositionedTask]:
        """Completed tasks in insertion order (not completion order), numbered from 1."""
        return _number(t for t in self._tasks if t.is_completed)

    def _active_indices(self) -> list[int]:
        return [i for i, t in enumerate(self._tasks) if not t.is_completed]

    def _resolve_active(self, position: int) -> int:
        """Map a position in the active view to an index in the full sequence."""
        active = self._active_indices()
        if position < 1 or position > len(active):
            logger.debug("position_rejected", position=position, active=len(active))
            raise PositionOutOfRange(position, len(active))
        return active[position - 1]


def _require_text(text: str) -> None:
    if not text or not text.strip():
        raise InvalidInput("task text must not be empty")


def _number(tasks: Iterable[Task]) -> list[PositionedTask]:
    return [PositionedTask(position=i, task=t) for i, t in enumerate(tasks, start=1)]
