"""Maps dates and relative offsets to journal identifiers."""

import logging
from datetime import date, timedelta
from typing import Callable

from .core.journal import (
    JournalState,
    Resolution,
    format_identifier,
    strip_lock_extension,
)
from .core.offsets import pick_offset
from .errors import InvalidDateError, MissingJournalError, TooFarBackError
from .ports import JournalStore

logger = logging.getLogger(__name__)


class RetrievalResolver:
    """
    Resolves commands to journal identifiers.

    Absent journals are a normal result: callers get a Resolution with
    state ABSENT and decide how to tell the user.
    """

    def __init__(
        self,
        store: JournalStore,
        date_format: str = "%Y_%m_%d",
        lock_extension: str = "7z",
        clock: Callable[[], date] = date.today,
    ):
        self.store = store
        self.date_format = date_format
        self.lock_extension = lock_extension
        self.clock = clock

    def resolve(self, day: date) -> Resolution:
        identifier = format_identifier(day, self.date_format)
        return Resolution(identifier, self.store.exists(identifier))

    def resolve_today(self) -> Resolution:
        return self.resolve(self.clock())

    def resolve_yesterday(self) -> Resolution:
        return self.resolve(self.clock() - timedelta(days=1))

    def resolve_date(self, year: int | str, month: int | str, day: int | str) -> Resolution:
        """Resolve an explicit calendar date.

        Raises:
            InvalidDateError: the triple is not a real date (no rollover).
        """
        attempted = f"{year}-{month}-{day}"
        try:
            target = date(int(year), int(month), int(day))
        except (ValueError, OverflowError):
            raise InvalidDateError(attempted)
        return self.resolve(target)

    def resolve_offset(self, n: int) -> Resolution:
        """Resolve the n-th journal strictly before today.

        Raises:
            TooFarBackError: fewer than ``n`` journals precede today.
        """
        has_today = self.resolve_today().exists
        pick = pick_offset(self.store.list_entries(), n, has_today)
        if not pick.found:
            raise TooFarBackError(n, pick.available, pick.total)

        identifier = strip_lock_extension(pick.entry, self.lock_extension)
        state = self.store.exists(identifier)
        if state is JournalState.ABSENT:
            raise MissingJournalError(f"Listed journal {pick.entry} has no file")
        logger.debug(f"Offset {n} resolved to {identifier}")
        return Resolution(identifier, state)
