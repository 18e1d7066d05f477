"""External editor adapter - runs the user's editor on a file."""

import logging
import shlex
import subprocess
from pathlib import Path

from daybook.errors import EditorError

logger = logging.getLogger(__name__)


class ExternalEditor:
    """
    Editor subprocess adapter.

    Implements Editor protocol. The command must block until editing is
    done; detaching editors are rejected when the config is validated.
    """

    def __init__(self, command: str):
        self.command = command
        self.argv = shlex.split(command)

    def edit(self, path: Path) -> None:
        """Open ``path`` in the editor and wait for it to exit."""
        cmd = [*self.argv, str(path)]
        logger.debug(f"Launching editor: {cmd}")
        try:
            result = subprocess.run(cmd)
        except FileNotFoundError:
            raise EditorError(f"Editor {self.argv[0]!r} not found - set EDITOR_COMMAND in daybook.conf")

        if result.returncode != 0:
            logger.error(f"Editor exited with status {result.returncode}")
            raise EditorError(f"Editor {self.argv[0]!r} exited with status {result.returncode}")
