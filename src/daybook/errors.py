"""Error types raised by daybook components.

Components raise; the CLI layer turns these into messages and exit codes.
"""


class DaybookError(Exception):
    """Base error. Expected failures exit with status 1."""

    exit_code = 1


class UsageError(DaybookError):
    """Bad argument shape or unrecognized token."""


class ConfigError(DaybookError):
    """Invalid configuration value."""


class AlreadyWrittenError(DaybookError):
    """An explicit create was requested but today's journal exists."""


class InvalidDateError(DaybookError):
    """A year/month/day triple that is not a real calendar date."""

    def __init__(self, attempted: str):
        self.attempted = attempted
        super().__init__(f"{attempted} is not a valid date")


class TooFarBackError(DaybookError):
    """Offset points before the oldest journal."""

    def __init__(self, requested: int, available: int, total: int):
        self.requested = requested
        self.available = available
        self.total = total
        plural = "journal" if available == 1 else "journals"
        super().__init__(
            f"Cannot go back {requested}: only {available} previous {plural} "
            f"available ({total} in total)"
        )


class IncorrectPasswordError(DaybookError):
    """The archive tool rejected the password."""


class LockFailedError(DaybookError):
    """The archive tool failed to lock a journal."""


class EditorError(DaybookError):
    """The external editor is missing or exited with a failure."""


class ArchiverError(DaybookError):
    """The external archive tool is missing or unusable."""


class SessionBusyError(DaybookError):
    """Another daybook process holds the storage lock."""


class DirtyScratchError(DaybookError):
    """The scratch area holds files left by an interrupted run."""


class InvariantError(DaybookError):
    """Programmer-invariant violation. Exits with status 2."""

    exit_code = 2


class MissingJournalError(InvariantError):
    """A journal expected to exist was not found."""


class CorruptStoreError(InvariantError):
    """Plain and locked files coexist for the same journal."""
