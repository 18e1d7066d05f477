"""7-Zip adapter - subprocess wrapper for password-protected archives."""

import logging
import subprocess
from pathlib import Path

from daybook.errors import ArchiverError

logger = logging.getLogger(__name__)


class SevenZipArchiver:
    """
    7-Zip subprocess adapter.

    Implements Archiver protocol. Archives are 7z with encrypted headers so
    file names inside are hidden too.
    """

    def __init__(self, command: str = "7z", timeout: int = 120):
        self.command = command
        self.timeout = timeout

    def _run(self, args: list[str], password: str, cwd: Path | None = None) -> bool:
        cmd = [self.command, *args, f"-p{password}", "-y"]
        logger.debug(f"Running {self.command} {' '.join(args)} -p*** -y")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise ArchiverError(f"{self.command} not found - install p7zip (or 7-Zip) to lock journals")
        except subprocess.TimeoutExpired:
            raise ArchiverError(f"{self.command} timed out after {self.timeout}s")

        if result.returncode != 0:
            logger.debug(f"{self.command} exited {result.returncode}: {result.stderr.strip()}")
            return False
        return True

    def compress(self, source: Path, archive: Path, password: str) -> bool:
        """Write ``source`` into a new encrypted archive."""
        # Run from the source's directory so the archive holds a bare file name.
        return self._run(
            ["a", "-t7z", "-mhe=on", str(archive.resolve()), source.name],
            password,
            cwd=source.parent,
        )

    def extract(self, archive: Path, out_dir: Path, password: str) -> bool:
        """Decrypt the archive's contents into ``out_dir``."""
        return self._run(["e", str(archive), f"-o{out_dir}"], password)
