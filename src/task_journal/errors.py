"""Error types raised by the task journal.

The store and journal file only classify failures; the CLI turns them
into messages and exit codes.
"""

from pathlib import Path


class JournalError(Exception):
    """Base class for all task journal errors."""

    pass


class InvalidInput(JournalError):
    """Raised when task text is empty or only whitespace."""

    pass


class PositionOutOfRange(JournalError):
    """Raised when a position does not address an entry in the filtered view."""

    def __init__(self, position: int, count: int) -> None:
        self.position = position
        self.count = count
        if count == 0:
            message = f"invalid task position {position}: there are no tasks to choose from"
        else:
            message = f"invalid task position {position}: expected 1 to {count}"
        super().__init__(message)


class CorruptJournal(JournalError):
    """Raised when the journal file exists but cannot be decoded."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"journal file {path} is corrupt: {detail}")


class IoFailure(JournalError):
    """Raised when reading or writing the journal file fails."""

    def __init__(self, path: Path, action: str, reason: str) -> None:
        self.path = path
        self.action = action
        super().__init__(f"failed to {action} journal file {path}: {reason}")
