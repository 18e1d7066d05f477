"""Functional core - pure journal logic with no I/O."""

from .journal import (
    JournalState,
    Password,
    Resolution,
    format_identifier,
    parse_identifier,
    strip_lock_extension,
)
from .entries import first_entry_header, later_entry_header
from .offsets import OffsetPick, pick_offset, target_rank

__all__ = [
    # Journal
    "JournalState",
    "Password",
    "Resolution",
    "format_identifier",
    "parse_identifier",
    "strip_lock_extension",
    # Entries
    "first_entry_header",
    "later_entry_header",
    # Offsets
    "OffsetPick",
    "pick_offset",
    "target_rank",
]
