"""structlog setup for the task journal.

Every journal event (task added, completed, edited, journal loaded or
saved) is a structlog event written to stderr, so listings on stdout
stay clean. ``log_format`` picks between a readable console line and one
JSON object per event.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from task_journal.config import JournalSettings


def configure_logging(
    settings: "JournalSettings | None" = None,
    log_level: str | None = None,
) -> None:
    """Configure structlog for one CLI run.

    Args:
        settings: Journal settings supplying ``log_level`` and
            ``log_format``. If None, warnings and errors go to the console.
        log_level: Level name from ``--log-level``; wins over settings.
    """
    level_name = log_level or (settings.log_level if settings else "warning")
    log_format = settings.log_format if settings else "console"
    level = getattr(logging, level_name.upper(), logging.WARNING)

    # command and journal_file are bound by the CLI for the whole run
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    # Not cached: tests and repeated CLI runs in one process reconfigure
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, named after the journal component using it."""
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_context(**kwargs: object) -> None:
    """Attach fields to every event logged for the rest of this run.

    Example:
        bind_context(command="done", journal_file="/home/me/.task-journal.json")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Forget the fields attached with bind_context."""
    structlog.contextvars.clear_contextvars()


class Loggers:
    """Loggers for the journal's components."""

    @staticmethod
    def cli() -> structlog.stdlib.BoundLogger:
        """Command dispatch, prompts and failures."""
        return get_logger("task_journal.cli")

    @staticmethod
    def tasks() -> structlog.stdlib.BoundLogger:
        """TaskStore mutations and rejected positions."""
        return get_logger("task_journal.tasks")

    @staticmethod
    def persistence() -> structlog.stdlib.BoundLogger:
        """Journal file loads and saves."""
        return get_logger("task_journal.persistence")
