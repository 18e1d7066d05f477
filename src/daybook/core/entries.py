"""Entry header formatting."""

from datetime import datetime

ENTRY_INDENT = "    "


def first_entry_header(now: datetime, fmt: str) -> str:
    """Long header that opens a new journal, followed by an indented blank line."""
    return f"{now.strftime(fmt)}\n{ENTRY_INDENT}\n"


def later_entry_header(now: datetime, fmt: str, existing: str = "") -> str:
    """Short header for a follow-up entry, separated from prior content by a blank line."""
    lead = "" if not existing or existing.endswith("\n") else "\n"
    return f"{lead}\n{now.strftime(fmt)}\n{ENTRY_INDENT}\n"
