"""Task Journal - a command line to-do journal backed by a JSON file.

The package is split into:

- tasks: the Task model and the TaskStore holding the ordered journal,
  addressed by 1-based positions in the active or completed view
- persistence: JournalFile, which loads and saves a TaskStore
- cli: the argparse front end that runs one command per invocation
"""

__version__ = "0.1.0"

from task_journal.errors import (
    CorruptJournal,
    InvalidInput,
    IoFailure,
    JournalError,
    PositionOutOfRange,
)
from task_journal.persistence import JournalFile
from task_journal.tasks import PositionedTask, Task, TaskStore

__all__ = [
    "TaskStore",
    "Task",
    "PositionedTask",
    "JournalFile",
    "JournalError",
    "InvalidInput",
    "PositionOutOfRange",
    "CorruptJournal",
    "IoFailure",
]
