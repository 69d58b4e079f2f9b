"""Task records and their JSON-friendly dict form."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


def parse_timestamp(value: Any, field_name: str) -> datetime:
    """Parse a stored timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings and integer epoch seconds (the format older
    journals were written in). Naive values are taken as UTC.

    Raises:
        ValueError: If the value is neither form.
    """
    if isinstance(value, bool):
        raise ValueError(f"'{field_name}' must be a timestamp, got {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"'{field_name}' is out of range: {value!r}") from e
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as e:
            raise ValueError(f"'{field_name}' is not an ISO-8601 timestamp: {value!r}") from e
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    raise ValueError(f"'{field_name}' must be a timestamp, got {value!r}")


@dataclass(frozen=True)
class Task:
    """A single journal entry.

    ``completed_at`` is None while the task is active and is set exactly
    once when it is completed.
    """

    text: str
    created_at: datetime
    completed_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a Task from its stored form, ignoring unknown fields.

        Raises:
            ValueError: If a required field is missing or malformed.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        if "text" not in data:
            raise ValueError("missing 'text'")
        text = data["text"]
        if not isinstance(text, str) or not text.strip():
            raise ValueError("'text' must be a non-empty string")
        # Older journals spell the creation key "create_at"
        key = "created_at" if "created_at" in data else "create_at"
        if key not in data:
            raise ValueError("missing 'created_at'")
        created_at = parse_timestamp(data[key], "created_at")
        raw_completed = data.get("completed_at")
        completed_at = None
        if raw_completed is not None:
            completed_at = parse_timestamp(raw_completed, "completed_at")
        return cls(text=text, created_at=created_at, completed_at=completed_at)


@dataclass(frozen=True)
class PositionedTask:
    """A task annotated with its 1-based position in a filtered view."""

    position: int
    task: Task

    @property
    def label(self) -> str:
        return f"{self.position}: {self.task.text}"

    def __str__(self) -> str:
        return self.label
