"""Ports - interfaces/protocols for external dependencies."""

from .journal_store import JournalStore
from .archiver import Archiver
from .editor import Editor

__all__ = [
    "JournalStore",
    "Archiver",
    "Editor",
]
