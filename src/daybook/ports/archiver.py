"""Password-protected archive tool interface."""

from pathlib import Path
from typing import Protocol


class Archiver(Protocol):
    """Encrypts a single file into an archive and back.

    Both methods report the tool's exit status as a bool: True on success.
    """

    def compress(self, source: Path, archive: Path, password: str) -> bool:
        """Write ``source`` into a new encrypted ``archive``."""
        ...

    def extract(self, archive: Path, out_dir: Path, password: str) -> bool:
        """Decrypt the contents of ``archive`` into ``out_dir``."""
        ...
