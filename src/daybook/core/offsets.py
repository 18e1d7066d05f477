"""Relative-offset ranking over a journal listing.

The listing handed in is the storage listing: the scratch pseudo-entry
first, then every journal entry sorted newest first. Offset ``n`` means
"the n-th journal strictly before today".
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OffsetPick:
    """Outcome of ranking an offset against a listing."""

    entry: str | None
    available: int
    total: int

    @property
    def found(self) -> bool:
        return self.entry is not None


def target_rank(n: int, has_today: bool) -> int:
    """1-indexed rank in the listing: skip scratch, and today when present."""
    if n < 1:
        raise ValueError(f"Offset must be at least 1, got {n}")
    return n + 2 if has_today else n + 1


def pick_offset(listing: list[str], n: int, has_today: bool) -> OffsetPick:
    """Select the entry ``n`` journals back, or report how many there are."""
    rank = target_rank(n, has_today)
    total = max(len(listing) - 1, 0)
    available = max(total - (1 if has_today else 0), 0)

    if rank > len(listing):
        return OffsetPick(entry=None, available=available, total=total)
    return OffsetPick(entry=listing[rank - 1], available=available, total=total)
