"""Command line interface for the task journal.

Each invocation loads the journal, runs exactly one command against the
TaskStore and, for commands that change it, saves the journal again.

Usage:
    task-journal add "Buy groceries"
    task-journal list
    task-journal done 1
    task-journal edit 1 "Buy groceries and milk"
    task-journal list-completed
    task-journal -j ~/work.json list
"""

import argparse
from pathlib import Path
from typing import Callable, Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from task_journal import __version__
from task_journal.cli.formatting import format_entry
from task_journal.config import JournalSettings, get_settings
from task_journal.errors import JournalError
from task_journal.logging import Loggers, bind_context, clear_context, configure_logging
from task_journal.persistence import JournalFile
from task_journal.tasks.models import PositionedTask

EXIT_OK = 0
EXIT_ERROR = 1

logger = Loggers.cli()

CommandHandler = Callable[[argparse.Namespace, JournalFile, Console], int]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per journal operation."""
    parser = argparse.ArgumentParser(
        prog="task-journal",
        description="A command line to-do journal backed by a JSON file.",
    )
    parser.add_argument(
        "-j",
        "--journal-file",
        type=Path,
        help="use a different journal file",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="override the configured log level for this run",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    add_p = subparsers.add_parser("add", help="write a task to the journal")
    add_p.add_argument("text", help="the task description")

    done_p = subparsers.add_parser("done", help="mark an active task as completed")
    done_p.add_argument("position", type=int, help="position shown by 'list'")
    done_p.add_argument(
        "-y", "--yes", action="store_true", help="complete without asking for confirmation"
    )

    subparsers.add_parser("list", help="list active tasks")
    subparsers.add_parser("list-completed", help="list completed tasks")

    edit_p = subparsers.add_parser("edit", help="change the text of an active task")
    edit_p.add_argument("position", type=int, help="position shown by 'list'")
    edit_p.add_argument("text", help="the new task description")

    return parser


def _cmd_add(args: argparse.Namespace, journal: JournalFile, console: Console) -> int:
    store = journal.load()
    store.add(args.text)
    journal.save(store)
    console.print(f"Added task {len(store.list_active())}.", highlight=False)
    return EXIT_OK


def _cmd_done(args: argparse.Namespace, journal: JournalFile, console: Console) -> int:
    store = journal.load()
    task = store.active_at(args.position)
    if not args.yes:
        try:
            confirmed = Confirm.ask(
                f"Mark task {args.position} [bold]{escape(task.text)}[/bold] as done?",
                console=console,
                default=False,
            )
        except EOFError:
            confirmed = False
        if not confirmed:
            logger.info("completion_declined", position=args.position)
            console.print("Nothing changed.")
            return EXIT_OK
    store.complete(args.position)
    journal.save(store)
    console.print(f"Completed task {args.position}.", highlight=False)
    return EXIT_OK


def _cmd_list(args: argparse.Namespace, journal: JournalFile, console: Console) -> int:
    _print_entries(console, journal.load().list_active(), "No active tasks.")
    return EXIT_OK


def _cmd_list_completed(args: argparse.Namespace, journal: JournalFile, console: Console) -> int:
    _print_entries(console, journal.load().list_completed(), "No completed tasks.")
    return EXIT_OK


def _cmd_edit(args: argparse.Namespace, journal: JournalFile, console: Console) -> int:
    store = journal.load()
    store.edit(args.position, args.text)
    journal.save(store)
    console.print(f"Updated task {args.position}.", highlight=False)
    return EXIT_OK


COMMANDS: dict[str, CommandHandler] = {
    "add": _cmd_add,
    "done": _cmd_done,
    "list": _cmd_list,
    "list-completed": _cmd_list_completed,
    "edit": _cmd_edit,
}


def _print_entries(console: Console, entries: list[PositionedTask], empty_message: str) -> None:
    if not entries:
        console.print(empty_message)
        return
    for entry in entries:
        console.print(format_entry(entry), soft_wrap=True)


def _resolve_settings(args: argparse.Namespace) -> JournalSettings:
    settings = get_settings()
    if args.journal_file is not None:
        settings = settings.model_copy(update={"journal_file": args.journal_file.expanduser()})
    return settings


def main(
    argv: Sequence[str] | None = None,
    console: Console | None = None,
    err_console: Console | None = None,
) -> int:
    """Run one journal command and return the process exit code."""
    console = console or Console()
    err_console = err_console or Console(stderr=True)

    args = build_parser().parse_args(argv)

    try:
        settings = _resolve_settings(args)
    except (ValidationError, ValueError) as e:
        # A malformed user settings.json surfaces as a JSONDecodeError
        err_console.print(f"error: invalid configuration\n{e}", markup=False, highlight=False)
        return EXIT_ERROR

    configure_logging(settings, log_level=args.log_level)
    clear_context()
    bind_context(command=args.command, journal_file=str(settings.journal_file))

    journal = JournalFile(settings.journal_file)
    try:
        return COMMANDS[args.command](args, journal, console)
    except JournalError as e:
        logger.debug("command_failed", error=type(e).__name__)
        err_console.print(f"error: {e}", markup=False, highlight=False)
        return EXIT_ERROR
    finally:
        clear_context()
