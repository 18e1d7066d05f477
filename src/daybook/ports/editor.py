"""Text editor interface."""

from pathlib import Path
from typing import Protocol


class Editor(Protocol):
    """A blocking, foreground editor."""

    def edit(self, path: Path) -> None:
        """Open ``path`` and return once the user is done with it."""
        ...
