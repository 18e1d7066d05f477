"""File-based journal storage adapter."""

import logging
from pathlib import Path

from daybook.config import Config
from daybook.core.journal import JournalState, parse_identifier, strip_lock_extension
from daybook.errors import CorruptStoreError, MissingJournalError

logger = logging.getLogger(__name__)


class FileJournalStore:
    """
    File-based journal storage.

    Implements JournalStore protocol. Each day gets one file named by its
    identifier, either plain text or an encrypted archive with the lock
    extension appended. A scratch directory sits beside the journals.
    """

    def __init__(self, config: Config):
        self.journal_dir = Path(config.storage_root).expanduser()
        self.scratch_name = config.scratch_dir_name
        self.lock_extension = config.lock_extension
        self.date_format = config.file_name_date_format

    @property
    def scratch_dir(self) -> Path:
        return self.journal_dir / self.scratch_name

    def ensure_layout(self) -> None:
        """Create the storage root and scratch area if missing."""
        self.scratch_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, identifier: str, locked: bool) -> Path:
        """Get the permanent file path for a journal."""
        if locked:
            return self.journal_dir / f"{identifier}.{self.lock_extension}"
        return self.journal_dir / identifier

    def exists(self, identifier: str) -> JournalState:
        """Check which form of a journal is in the permanent store."""
        plain = self.path_for(identifier, locked=False).is_file()
        locked = self.path_for(identifier, locked=True).is_file()

        if plain and locked:
            raise CorruptStoreError(
                f"Both {identifier} and {identifier}.{self.lock_extension} exist in {self.journal_dir}"
            )
        if locked:
            return JournalState.LOCKED
        if plain:
            return JournalState.PLAIN
        return JournalState.ABSENT

    def _is_journal_entry(self, name: str) -> bool:
        return parse_identifier(strip_lock_extension(name, self.lock_extension), self.date_format) is not None

    def list_entries(self) -> list[str]:
        """List the scratch pseudo-entry, then journal entries newest first."""
        if not self.journal_dir.is_dir():
            return []

        entries = []
        for path in self.journal_dir.iterdir():
            if path.name == self.scratch_name:
                continue
            if path.is_file() and self._is_journal_entry(path.name):
                entries.append(path.name)
            else:
                logger.debug(f"Not counting {path.name} as a journal")

        entries.sort(reverse=True)
        if self.scratch_dir.is_dir():
            entries.insert(0, self.scratch_name)
        return entries

    def scratch_contents(self) -> list[Path]:
        if not self.scratch_dir.is_dir():
            return []
        return sorted(self.scratch_dir.iterdir())

    def read(self, identifier: str) -> str:
        """Read a plain journal's content."""
        path = self.path_for(identifier, locked=False)
        if not path.is_file():
            raise MissingJournalError(f"Expected journal {identifier} at {path}")
        return path.read_text(encoding="utf-8")
