"""Journal session orchestration.

A session sequences the store, lock manager and entry editor for one
command: writing today's journal or reading one. Locked journals are only
ever opened in the scratch area and every path out of a session leaves
scratch empty.
"""

import logging
from contextlib import contextmanager
from typing import Callable

import click

from .adapters import ExternalEditor, FileJournalStore, SevenZipArchiver
from .commands import (
    HELP_TEXT,
    Command,
    ReadDate,
    ReadPrevious,
    ReadToday,
    ReadYesterday,
    ShowHelp,
    WriteToday,
)
from .config import Config
from .core.journal import JournalState, Password, Resolution, parse_identifier
from .entries import EntryEditor
from .errors import AlreadyWrittenError, DirtyScratchError
from .lock_manager import LockManager
from .locking import storage_lock
from .resolver import RetrievalResolver

logger = logging.getLogger(__name__)


def prompt_password(prompt: str, confirm: bool = False) -> Password:
    """Ask for a password on the terminal; with ``confirm``, retry until both match."""
    secret = click.prompt(prompt, hide_input=True, confirmation_prompt=confirm)
    return Password(secret)


class JournalSession:
    """Runs journal commands against one storage root."""

    def __init__(
        self,
        config: Config,
        store: FileJournalStore,
        locks: LockManager,
        entries: EntryEditor,
        resolver: RetrievalResolver,
        ask_password: Callable[..., Password] = prompt_password,
        view: Callable[[str], None] = click.echo_via_pager,
        echo: Callable[[str], None] = click.echo,
    ):
        self.config = config
        self.store = store
        self.locks = locks
        self.entries = entries
        self.resolver = resolver
        self.ask_password = ask_password
        self.view = view
        self.echo = echo

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "JournalSession":
        """Wire a session to the real filesystem, 7z and editor."""
        store = FileJournalStore(config)
        return cls(
            config,
            store=store,
            locks=LockManager(store, SevenZipArchiver(config.archive_command)),
            entries=EntryEditor(
                ExternalEditor(config.editor_command),
                config.first_entry_time_format,
                config.later_entry_time_format,
            ),
            resolver=RetrievalResolver(store, config.file_name_date_format, config.lock_extension),
            **kwargs,
        )

    def run(self, command: Command) -> None:
        match command:
            case WriteToday(lock=lock, create_only=create_only):
                self.write_today(lock=lock, create_only=create_only)
            case ReadToday():
                self.read_today()
            case ReadYesterday():
                self.read_yesterday()
            case ReadPrevious(n=n):
                self.read_previous(n)
            case ReadDate(year=year, month=month, day=day):
                self.read_date(year, month, day)
            case ShowHelp():
                self.echo(HELP_TEXT)

    @contextmanager
    def _transaction(self):
        """Hold the storage lock and check scratch is clean before and after."""
        with storage_lock(self.config.session_lock_file, self.config.lock_timeout):
            self.store.ensure_layout()
            leftovers = self.store.scratch_contents()
            if leftovers:
                names = ", ".join(p.name for p in leftovers)
                raise DirtyScratchError(
                    f"{self.store.scratch_dir} holds files from an interrupted session: {names}. "
                    "Recover or delete them before continuing."
                )
            try:
                yield
            finally:
                remaining = self.store.scratch_contents()
                if remaining:
                    logger.warning(f"Scratch not empty after session: {[p.name for p in remaining]}")

    # ============== Writing ==============

    def write_today(self, lock: bool | None = None, create_only: bool = False) -> None:
        """Create today's journal, or add an entry to it.

        ``lock`` overrides the configured default for a new journal.
        ``create_only`` refuses to touch an existing one.
        """
        with self._transaction():
            today = self.resolver.resolve_today()

            if today.exists and create_only:
                raise AlreadyWrittenError(
                    f"Today's journal ({today.identifier}) already exists; "
                    "run daybook with no arguments to add an entry"
                )

            match today.state:
                case JournalState.ABSENT:
                    locked = self.config.lock_by_default if lock is None else lock
                    self._create(today.identifier, locked)
                case JournalState.PLAIN:
                    self._append_plain(today.identifier)
                case JournalState.LOCKED:
                    self._append_locked(today.identifier)

    def _create(self, identifier: str, locked: bool) -> None:
        if not locked:
            self.entries.write_first_entry(self.store.path_for(identifier, locked=False))
            self.echo(f"Saved {identifier}.")
            return

        scratch_plain = self.store.scratch_dir / identifier
        try:
            self.entries.write_first_entry(scratch_plain)
            # Asked only after editing so a password prompt never blocks writing.
            with self.ask_password(f"New password for {identifier}", confirm=True) as password:
                self.locks.lock_from_scratch(
                    scratch_plain, self.store.path_for(identifier, locked=True), password
                )
        finally:
            scratch_plain.unlink(missing_ok=True)
        self.echo(f"Saved and locked {identifier}.")

    def _append_plain(self, identifier: str) -> None:
        self.entries.append_entry(self.store.path_for(identifier, locked=False))
        self.echo(f"Saved {identifier}.")

    def _append_locked(self, identifier: str) -> None:
        with self.ask_password(f"Password for {identifier}") as password:
            scratch_plain = self.locks.unlock_to_scratch(identifier, password)
            try:
                self.entries.append_entry(scratch_plain)
                # Re-lock with the password that unlocked it; no second prompt.
                self.locks.lock_from_scratch(
                    scratch_plain, self.store.path_for(identifier, locked=True), password
                )
            finally:
                scratch_plain.unlink(missing_ok=True)
        self.echo(f"Saved and locked {identifier}.")

    # ============== Reading ==============

    def read_today(self) -> None:
        with self._transaction():
            self._read(self.resolver.resolve_today())

    def read_yesterday(self) -> None:
        with self._transaction():
            self._read(self.resolver.resolve_yesterday())

    def read_previous(self, n: int) -> None:
        with self._transaction():
            self._read(self.resolver.resolve_offset(n))

    def read_date(self, year, month, day) -> None:
        with self._transaction():
            self._read(self.resolver.resolve_date(year, month, day))

    def _describe(self, identifier: str) -> str:
        day = parse_identifier(identifier, self.config.file_name_date_format)
        return day.strftime("%A, %B %d %Y") if day else identifier

    def _read(self, target: Resolution) -> None:
        match target.state:
            case JournalState.ABSENT:
                self.echo(f"No journal for {self._describe(target.identifier)}.")
            case JournalState.PLAIN:
                self.view(self.store.read(target.identifier))
            case JournalState.LOCKED:
                self._read_locked(target.identifier)

    def _read_locked(self, identifier: str) -> None:
        with self.ask_password(f"Password for {identifier}") as password:
            scratch_plain = self.locks.unlock_to_scratch(identifier, password)

        try:
            self.view(scratch_plain.read_text(encoding="utf-8"))
        finally:
            scratch_plain.unlink(missing_ok=True)
