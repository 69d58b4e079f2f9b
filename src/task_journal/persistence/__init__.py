"""Persistence module for the task journal."""

from task_journal.persistence.journal_file import JournalFile, load, save

__all__ = ["JournalFile", "load", "save"]
