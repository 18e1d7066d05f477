"""Storage-wide lock so only one daybook session touches a store at a time."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import portalocker

from .errors import SessionBusyError

logger = logging.getLogger(__name__)


@contextmanager
def storage_lock(lock_path: Path, timeout: float = 5.0) -> Generator[None, None, None]:
    """Hold an exclusive lock on ``lock_path`` for the duration of a session.

    Args:
        lock_path: Lock file, kept outside the journal listing
        timeout: Seconds to wait for another session to finish

    Raises:
        SessionBusyError: If the lock cannot be acquired in time
    """
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        lock = portalocker.Lock(lock_path, mode="a", timeout=timeout)
        lock.acquire()
    except portalocker.LockException:
        raise SessionBusyError(f"Another daybook session is using {lock_path.parent}")

    logger.debug(f"Acquired {lock_path}")
    try:
        yield
    finally:
        lock.release()
