"""Journal identifiers, states and passwords."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class JournalState(Enum):
    """Where a journal lives in the permanent store."""

    ABSENT = "absent"
    PLAIN = "plain"
    LOCKED = "locked"

    @property
    def exists(self) -> bool:
        return self is not JournalState.ABSENT


@dataclass(frozen=True)
class Resolution:
    """A journal identifier together with its state at resolution time."""

    identifier: str
    state: JournalState

    @property
    def exists(self) -> bool:
        return self.state.exists


def format_identifier(day: date, fmt: str = "%Y_%m_%d") -> str:
    """Canonical identifier for a calendar day."""
    return day.strftime(fmt)


def parse_identifier(name: str, fmt: str = "%Y_%m_%d") -> date | None:
    """Return the date an identifier names, or None if it isn't one.

    The round trip check rejects names strptime accepts loosely (e.g. a
    missing zero pad), since those would break lexicographic ordering.
    """
    try:
        parsed = datetime.strptime(name, fmt).date()
    except ValueError:
        return None
    if format_identifier(parsed, fmt) != name:
        return None
    return parsed


def strip_lock_extension(name: str, lock_extension: str) -> str:
    suffix = f".{lock_extension}"
    if name.endswith(suffix):
        return name[: -len(suffix)]
    return name


class Password:
    """A password held in a mutable buffer so it can be wiped after use."""

    def __init__(self, secret: str):
        self._buffer = bytearray(secret.encode("utf-8"))

    def reveal(self) -> str:
        if self.cleared:
            raise ValueError("Password has been cleared")
        return self._buffer.decode("utf-8")

    def clear(self) -> None:
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self._buffer = bytearray()

    @property
    def cleared(self) -> bool:
        return not self._buffer

    def __enter__(self) -> "Password":
        return self

    def __exit__(self, *exc) -> None:
        self.clear()

    def __repr__(self) -> str:
        return "Password(<cleared>)" if self.cleared else "Password(***)"
