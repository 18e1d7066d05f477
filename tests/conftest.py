"""Shared pytest fixtures for daybook tests."""

import base64
import json
from datetime import date, datetime
from pathlib import Path

import pytest

from daybook.adapters import FileJournalStore
from daybook.config import Config
from daybook.core.journal import Password
from daybook.entries import EntryEditor
from daybook.lock_manager import LockManager
from daybook.resolver import RetrievalResolver
from daybook.session import JournalSession

TODAY = date(2025, 1, 15)
NOW = datetime(2025, 1, 15, 9, 30)


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class FakeArchiver:
    """Stands in for 7z: an "archive" is JSON holding the password and content."""

    def __init__(self, fail_compress: bool = False):
        self.fail_compress = fail_compress
        self.calls = []

    def compress(self, source: Path, archive: Path, password: str) -> bool:
        self.calls.append(("compress", source, archive))
        if self.fail_compress:
            archive.write_text("partial")
            return False
        archive.write_text(
            json.dumps({"name": source.name, "password": password, "content": _encode(source.read_bytes())})
        )
        return True

    def extract(self, archive: Path, out_dir: Path, password: str) -> bool:
        self.calls.append(("extract", archive, out_dir))
        data = json.loads(archive.read_text())
        if data["password"] != password:
            # Real tools may leave a truncated file behind on failure
            (out_dir / data["name"]).write_text("")
            return False
        (out_dir / data["name"]).write_bytes(base64.b64decode(data["content"]))
        return True


class FakeEditor:
    """Appends canned text instead of opening an editor."""

    def __init__(self, text: str = "Dear diary\n"):
        self.text = text
        self.edited = []

    def edit(self, path: Path) -> None:
        self.edited.append(path)
        with path.open("a") as f:
            f.write(self.text)


class PasswordQueue:
    """Answers password prompts from a list, recording each prompt."""

    def __init__(self, *secrets: str):
        self.secrets = list(secrets)
        self.prompts = []
        self.handed_out = []

    def __call__(self, prompt: str, confirm: bool = False) -> Password:
        self.prompts.append((prompt, confirm))
        password = Password(self.secrets.pop(0))
        self.handed_out.append(password)
        return password


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def config(tmp_path):
    return Config(storage_root=tmp_path / "journal", editor_command="vi")


@pytest.fixture
def store(config):
    s = FileJournalStore(config)
    s.ensure_layout()
    return s


@pytest.fixture
def archiver():
    return FakeArchiver()


@pytest.fixture
def editor():
    return FakeEditor()


@pytest.fixture
def passwords():
    return PasswordQueue()


@pytest.fixture
def lock_manager(store, archiver):
    return LockManager(store, archiver)


@pytest.fixture
def resolver(store, config):
    return RetrievalResolver(
        store, config.file_name_date_format, config.lock_extension, clock=lambda: TODAY
    )


@pytest.fixture
def output():
    """Collects what a session shows: paged views and echoed messages."""
    return {"viewed": [], "messages": []}


@pytest.fixture
def session(config, store, lock_manager, editor, resolver, passwords, output):
    return JournalSession(
        config,
        store=store,
        locks=lock_manager,
        entries=EntryEditor(
            editor,
            config.first_entry_time_format,
            config.later_entry_time_format,
            clock=lambda: NOW,
        ),
        resolver=resolver,
        ask_password=passwords,
        view=output["viewed"].append,
        echo=output["messages"].append,
    )


def make_journal(store, identifier: str, content: str = "entry\n", locked: bool = False, password: str = "pw"):
    """Put a journal straight into the store."""
    if locked:
        store.path_for(identifier, locked=True).write_text(
            json.dumps({"name": identifier, "password": password, "content": _encode(content.encode())})
        )
    else:
        store.path_for(identifier, locked=False).write_text(content)
