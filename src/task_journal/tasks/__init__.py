"""Task model and store for the journal.

Positions are 1-based indexes into the active or completed view and
are recomputed on every call.

Example:
    >>> store = TaskStore()
    >>> store.add("Buy groceries")
    >>> store.complete(1)
    >>> store.list_completed()[0].label
    '1: Buy groceries'
"""

from task_journal.tasks.models import PositionedTask, Task
from task_journal.tasks.store import TaskStore

__all__ = ["TaskStore", "Task", "PositionedTask"]
