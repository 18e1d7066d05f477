"""Journal storage interface."""

from pathlib import Path
from typing import Protocol

from daybook.core.journal import JournalState


class JournalStore(Protocol):
    """Interface for locating journals in the permanent store."""

    @property
    def scratch_dir(self) -> Path:
        """Transient working area used while a locked journal is open."""
        ...

    def exists(self, identifier: str) -> JournalState:
        """Report whether a journal is absent, plain or locked."""
        ...

    def path_for(self, identifier: str, locked: bool) -> Path:
        """Permanent path of a journal in the given form. No I/O."""
        ...

    def list_entries(self) -> list[str]:
        """Scratch pseudo-entry first, then journal entries newest first."""
        ...

    def read(self, identifier: str) -> str:
        """Read a plain journal's content."""
        ...
