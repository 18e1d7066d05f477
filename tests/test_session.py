"""Tests for journal session orchestration."""

import portalocker
import pytest

from daybook.commands import ReadDate, ReadPrevious, ReadToday, ReadYesterday, ShowHelp, WriteToday
from daybook.core.journal import JournalState, Password
from daybook.errors import (
    AlreadyWrittenError,
    DirtyScratchError,
    EditorError,
    IncorrectPasswordError,
    InvalidDateError,
    LockFailedError,
    SessionBusyError,
    TooFarBackError,
)

from conftest import FakeArchiver, make_journal

class FailingEditor:
    """An editor that exits with an error status."""

    def edit(self, path):
        raise EditorError("Editor 'vi' exited with status 1")


FIRST = "Wednesday, January 15 2025 - 09:30\n    \nDear diary\n"
LATER = "\n09:30\n    \nDear diary\n"


def plaintext_copies(store, identifier):
    return [p for p in store.journal_dir.rglob(identifier) if p.is_file()]


def unlock_content(lock_manager, identifier, secret):
    plain = lock_manager.unlock_to_scratch(identifier, Password(secret))
    try:
        return plain.read_text()
    finally:
        plain.unlink()


@pytest.fixture(autouse=True)
def scratch_is_empty_afterwards(store):
    yield
    assert store.scratch_contents() == []


class TestWriteToday:
    def test_first_write_unlocked(self, session, store, output):
        session.write_today(lock=False, create_only=True)

        assert store.list_entries() == ["tmp", "2025_01_15"]
        assert store.exists("2025_01_15") is JournalState.PLAIN
        assert store.read("2025_01_15") == FIRST
        assert output["messages"] == ["Saved 2025_01_15."]

    def test_append_to_plain(self, session, store):
        session.write_today(lock=False, create_only=True)
        session.write_today()

        assert store.read("2025_01_15") == FIRST + LATER
        assert store.exists("2025_01_15") is JournalState.PLAIN

    def test_default_follows_config(self, session, store, config):
        session.write_today()
        assert store.exists("2025_01_15") is JournalState.PLAIN

    def test_lock_by_default(self, session, store, config, passwords):
        config.lock_by_default = True
        passwords.secrets = ["abc123"]

        session.write_today()

        assert store.exists("2025_01_15") is JournalState.LOCKED

    def test_locked_round_trip(self, session, store, lock_manager, passwords, editor):
        passwords.secrets = ["abc123", "abc123"]

        session.write_today(lock=True, create_only=True)
        assert store.exists("2025_01_15") is JournalState.LOCKED
        assert plaintext_copies(store, "2025_01_15") == []
        # Editing happens in scratch, before the password is asked for
        assert editor.edited == [store.scratch_dir / "2025_01_15"]

        session.write_today()
        assert store.exists("2025_01_15") is JournalState.LOCKED
        assert plaintext_copies(store, "2025_01_15") == []
        assert unlock_content(lock_manager, "2025_01_15", "abc123") == FIRST + LATER

        # Confirmation only when choosing a password; one prompt when appending
        assert [confirm for _, confirm in passwords.prompts] == [True, False]
        assert all(p.cleared for p in passwords.handed_out)

    def test_wrong_password_aborts_append(self, session, store, passwords, editor):
        make_journal(store, "2025_01_15", content="old\n", locked=True, password="abc123")
        archive = store.path_for("2025_01_15", locked=True)
        before = archive.read_text()
        passwords.secrets = ["wrong"]

        with pytest.raises(IncorrectPasswordError):
            session.write_today()

        assert archive.read_text() == before
        assert editor.edited == []
        assert len(passwords.prompts) == 1
        assert passwords.handed_out[0].cleared

    def test_failed_relock_keeps_old_archive(self, session, store, passwords, lock_manager):
        make_journal(store, "2025_01_15", content="old\n", locked=True, password="abc123")
        passwords.secrets = ["abc123"]
        lock_manager.archiver = FakeArchiver(fail_compress=True)

        with pytest.raises(LockFailedError):
            session.write_today()

        lock_manager.archiver = FakeArchiver()
        assert unlock_content(lock_manager, "2025_01_15", "abc123") == "old\n"

    def test_editor_failure_skips_relock(self, session, store, passwords, archiver):
        make_journal(store, "2025_01_15", content="old\n", locked=True, password="abc123")
        archive = store.path_for("2025_01_15", locked=True)
        before = archive.read_bytes()
        passwords.secrets = ["abc123"]
        session.entries.editor = FailingEditor()

        with pytest.raises(EditorError):
            session.write_today()

        assert archive.read_bytes() == before
        assert [call[0] for call in archiver.calls] == ["extract"]
        assert store.scratch_contents() == []
        assert passwords.handed_out[0].cleared

    def test_editor_failure_on_locked_create(self, session, store, passwords, archiver):
        session.entries.editor = FailingEditor()

        with pytest.raises(EditorError):
            session.write_today(lock=True, create_only=True)

        assert store.exists("2025_01_15") is JournalState.ABSENT
        assert archiver.calls == []
        assert passwords.prompts == []
        assert store.scratch_contents() == []

    @pytest.mark.parametrize("locked", [True, False])
    def test_explicit_create_refuses_existing(self, session, store, locked):
        make_journal(store, "2025_01_15", content="old\n")

        with pytest.raises(AlreadyWrittenError):
            session.write_today(lock=locked, create_only=True)

        assert store.read("2025_01_15") == "old\n"

    def test_abandoned_password_prompt_cleans_scratch(self, session, store, passwords):
        def abort(prompt, confirm=False):
            raise KeyboardInterrupt

        session.ask_password = abort

        with pytest.raises(KeyboardInterrupt):
            session.write_today(lock=True, create_only=True)

        assert store.exists("2025_01_15") is JournalState.ABSENT


class TestRead:
    def test_read_plain(self, session, store, output):
        make_journal(store, "2025_01_15", content="hello\n")
        session.read_today()
        assert output["viewed"] == ["hello\n"]

    def test_read_locked(self, session, store, passwords, output):
        make_journal(store, "2025_01_14", content="hidden\n", locked=True, password="abc123")
        archive = store.path_for("2025_01_14", locked=True)
        before = archive.read_text()
        passwords.secrets = ["abc123"]

        session.read_yesterday()

        assert output["viewed"] == ["hidden\n"]
        assert archive.read_text() == before
        assert plaintext_copies(store, "2025_01_14") == []
        assert passwords.handed_out[0].cleared

    def test_read_locked_wrong_password(self, session, store, passwords, output):
        make_journal(store, "2025_01_14", locked=True, password="abc123")
        passwords.secrets = ["nope"]

        with pytest.raises(IncorrectPasswordError):
            session.read_yesterday()

        assert output["viewed"] == []
        assert len(passwords.prompts) == 1

    def test_read_absent(self, session, output):
        session.read_date("2024", "03", "09")
        assert output["messages"] == ["No journal for Saturday, March 09 2024."]
        assert output["viewed"] == []

    def test_read_invalid_date(self, session):
        with pytest.raises(InvalidDateError):
            session.read_date("1970", "13", "01")

    def test_read_previous(self, session, store, output):
        make_journal(store, "2025_01_15", content="today\n")
        make_journal(store, "2025_01_11", content="saturday\n")
        make_journal(store, "2025_01_02", content="long ago\n")

        session.read_previous(2)

        assert output["viewed"] == ["long ago\n"]

    def test_read_previous_too_far(self, session, store):
        make_journal(store, "2025_01_15")
        with pytest.raises(TooFarBackError):
            session.read_previous(1)


class TestSessionGuards:
    def test_dirty_scratch_refuses(self, session, store):
        leftover = store.scratch_dir / "2025_01_10"
        leftover.write_text("from a crashed run")

        with pytest.raises(DirtyScratchError, match="2025_01_10"):
            session.read_today()

        leftover.unlink()

    def test_busy_storage(self, session, config):
        config.lock_timeout = 0.1
        with portalocker.Lock(config.session_lock_file, mode="a", timeout=0.1):
            with pytest.raises(SessionBusyError):
                session.read_today()


class TestRun:
    def test_dispatch(self, session, store, output):
        make_journal(store, "2025_01_15", content="today\n")
        make_journal(store, "2025_01_14", content="yesterday\n")

        session.run(ReadToday())
        session.run(ReadYesterday())
        session.run(ReadPrevious(n=1))
        session.run(ReadDate("2025", "01", "14"))

        assert output["viewed"] == ["today\n", "yesterday\n", "yesterday\n", "yesterday\n"]

    def test_write_command(self, session, store):
        session.run(WriteToday(lock=False, create_only=True))
        assert store.exists("2025_01_15") is JournalState.PLAIN

    def test_help(self, session, output):
        session.run(ShowHelp())
        assert output["messages"][0].startswith("usage: daybook")
