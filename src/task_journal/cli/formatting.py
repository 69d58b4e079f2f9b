"""Console rendering for journal listings."""

from datetime import datetime

from rich.cells import cell_len
from rich.text import Text

from task_journal.tasks.models import PositionedTask, Task

TEXT_COLUMN_WIDTH = 80
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_local_time(moment: datetime) -> str:
    """Format an aware timestamp in the local timezone."""
    return moment.astimezone().strftime(TIME_FORMAT)


def format_task(task: Task, width: int = TEXT_COLUMN_WIDTH) -> Text:
    """Render a task as padded text followed by its timestamps.

    Padding is measured in terminal cells so wide characters line up.
    """
    padding = max(width - cell_len(task.text), 0)
    line = Text(task.text + " " * padding)
    line.append(f" [{format_local_time(task.created_at)}]", style="dim")
    if task.completed_at is not None:
        line.append(f" (completed at {format_local_time(task.completed_at)})", style="green")
    return line


def format_entry(entry: PositionedTask) -> Text:
    """Render a numbered listing line: ``<n>. <task>``."""
    line = Text(f"{entry.position}. ", style="bold cyan")
    line.append_text(format_task(entry.task))
    return line
