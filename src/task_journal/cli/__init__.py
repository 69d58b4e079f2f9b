"""Command line interface for the task journal."""

from task_journal.cli.app import build_parser, main

__all__ = ["build_parser", "main"]
