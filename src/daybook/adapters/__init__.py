"""Adapters - I/O implementations of ports."""

from .file_journal import FileJournalStore
from .sevenzip import SevenZipArchiver
from .editor import ExternalEditor

__all__ = [
    "FileJournalStore",
    "SevenZipArchiver",
    "ExternalEditor",
]
