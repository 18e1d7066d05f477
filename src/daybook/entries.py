"""Writes entry headers and hands journals to the editor."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from .core.entries import first_entry_header, later_entry_header
from .ports import Editor

logger = logging.getLogger(__name__)


class EntryEditor:
    """Stamps a new entry into a journal file, then opens it for editing."""

    def __init__(
        self,
        editor: Editor,
        first_format: str = "%A, %B %d %Y - %H:%M",
        later_format: str = "%H:%M",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.editor = editor
        self.first_format = first_format
        self.later_format = later_format
        self.clock = clock

    def write_first_entry(self, path: Path) -> None:
        """Start a new journal with a long timestamp header."""
        path.write_text(first_entry_header(self.clock(), self.first_format), encoding="utf-8")
        logger.debug(f"Started {path.name}")
        self.editor.edit(path)

    def append_entry(self, path: Path) -> None:
        """Add a short-timestamp entry after the existing content."""
        existing = path.read_text(encoding="utf-8")
        with path.open("a", encoding="utf-8") as f:
            f.write(later_entry_header(self.clock(), self.later_format, existing))
        logger.debug(f"Appended entry to {path.name}")
        self.editor.edit(path)
