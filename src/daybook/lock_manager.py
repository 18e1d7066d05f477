"""Moves locked journals in and out of the scratch area."""

import logging
import shutil
from pathlib import Path

from .core.journal import Password
from .errors import IncorrectPasswordError, LockFailedError, MissingJournalError
from .ports import Archiver, JournalStore

logger = logging.getLogger(__name__)


class LockManager:
    """
    Unlocks journals into scratch and locks them back.

    Every method removes the scratch files it created before returning,
    whether the archive tool succeeded or not.
    """

    def __init__(self, store: JournalStore, archiver: Archiver):
        self.store = store
        self.archiver = archiver

    def unlock_to_scratch(self, identifier: str, password: Password) -> Path:
        """Decrypt a locked journal into scratch and return the plaintext path.

        Raises:
            MissingJournalError: no locked archive exists for ``identifier``.
            IncorrectPasswordError: the archive tool rejected the password.
        """
        archive = self.store.path_for(identifier, locked=True)
        if not archive.is_file():
            raise MissingJournalError(f"Expected locked journal at {archive}")

        scratch = self.store.scratch_dir
        scratch_archive = scratch / archive.name
        plain = scratch / identifier

        before = set(scratch.iterdir())
        shutil.copy2(archive, scratch_archive)
        unlocked = False
        try:
            unlocked = self.archiver.extract(scratch_archive, scratch, password.reveal())
        finally:
            scratch_archive.unlink(missing_ok=True)
            if not unlocked:
                plain.unlink(missing_ok=True)

        if not unlocked:
            logger.info(f"Unlock of {identifier} rejected")
            raise IncorrectPasswordError(f"Incorrect password for {identifier}")
        if not plain.is_file():
            self._discard_new(scratch, before)
            raise MissingJournalError(f"{archive.name} does not contain {identifier}")

        logger.debug(f"Unlocked {identifier} into {scratch}")
        return plain

    def _discard_new(self, scratch: Path, before: set[Path]) -> None:
        """Remove whatever an extraction added to scratch."""
        for path in set(scratch.iterdir()) - before:
            logger.warning(f"Removing unexpected {path.name} from scratch")
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()

    def lock_from_scratch(self, scratch_plain: Path, destination: Path, password: Password) -> None:
        """Encrypt a scratch plaintext into ``destination`` and delete the plaintext.

        The archive is built inside scratch and only moved over
        ``destination`` once the tool succeeds, so a failed lock leaves any
        previous archive intact. The plaintext is deleted either way.

        Raises:
            MissingJournalError: ``scratch_plain`` does not exist.
            LockFailedError: the archive tool failed.
        """
        if not scratch_plain.is_file():
            raise MissingJournalError(f"Expected plaintext journal at {scratch_plain}")

        staging = scratch_plain.with_name(destination.name)
        staging.unlink(missing_ok=True)
        locked = False
        try:
            locked = self.archiver.compress(scratch_plain, staging, password.reveal())
            if locked:
                staging.replace(destination)
        finally:
            scratch_plain.unlink(missing_ok=True)
            staging.unlink(missing_ok=True)

        if not locked:
            logger.error(f"Failed to lock {scratch_plain.name}; this session's changes were discarded")
            raise LockFailedError(
                f"Could not lock {scratch_plain.name}; this session's changes were discarded"
            )
        logger.debug(f"Locked {scratch_plain.name} into {destination}")
