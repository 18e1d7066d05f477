"""Turns command-line tokens into journal commands."""

import re
from dataclasses import dataclass

from .errors import UsageError

SYNOPSIS = "usage: daybook [l | u | t | y | p... | h | YYYY MM DD]"

HELP_TEXT = f"""{SYNOPSIS}

With no arguments, start today's journal or add an entry to it.

  l, -l, --locked      start today's journal, locked with a password
  u, -u, --unlocked    start today's journal, unlocked
  t, r, --today        read today's journal
  y, --yesterday       read yesterday's journal
  p, pp, ppp, ...      read the N-th previous journal (one p per step back)
  YYYY MM DD           read the journal for that date
  h, --help            show this help

Options:
  --config PATH        use a different daybook.conf
  --debug              log what daybook is doing
  --version            show the version and exit
"""


@dataclass(frozen=True)
class WriteToday:
    """Start or continue today's journal."""

    lock: bool | None = None
    create_only: bool = False


@dataclass(frozen=True)
class ReadToday:
    pass


@dataclass(frozen=True)
class ReadYesterday:
    pass


@dataclass(frozen=True)
class ReadPrevious:
    n: int


@dataclass(frozen=True)
class ReadDate:
    year: str
    month: str
    day: str


@dataclass(frozen=True)
class ShowHelp:
    pass


Command = WriteToday | ReadToday | ReadYesterday | ReadPrevious | ReadDate | ShowHelp

_TOKENS = {
    **dict.fromkeys(["l", "-l", "--locked", "locked"], WriteToday(lock=True, create_only=True)),
    **dict.fromkeys(["u", "-u", "--unlocked", "unlocked"], WriteToday(lock=False, create_only=True)),
    **dict.fromkeys(["t", "-t", "--today", "today", "r", "-r", "--read", "read"], ReadToday()),
    **dict.fromkeys(["y", "-y", "--yesterday", "yesterday"], ReadYesterday()),
    **dict.fromkeys(["h", "-h", "--help", "help"], ShowHelp()),
}

_PREVIOUS = re.compile(r"-?(p+)")
_NUMBER = re.compile(r"\d+")


def parse_command(tokens: list[str] | tuple[str, ...]) -> Command:
    """Parse positional tokens.

    Raises:
        UsageError: wrong number of arguments or an unknown token.
    """
    tokens = list(tokens)

    if not tokens:
        return WriteToday()

    if len(tokens) == 1:
        token = tokens[0]
        if token in _TOKENS:
            return _TOKENS[token]
        match = _PREVIOUS.fullmatch(token)
        if match:
            return ReadPrevious(n=len(match.group(1)))
        raise UsageError(f"Unrecognized argument: {token}")

    if len(tokens) == 3:
        if not all(_NUMBER.fullmatch(t) for t in tokens):
            raise UsageError(f"Expected a date as YYYY MM DD, got {' '.join(tokens)}")
        return ReadDate(*tokens)

    raise UsageError(f"Expected 0, 1 or 3 arguments, got {len(tokens)}")
