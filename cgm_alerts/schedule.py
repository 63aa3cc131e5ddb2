"""Pick the alert entry applicable at a given time of day."""
from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional, Sequence

from .models import AlertEntry

MINUTES_PER_DAY = 24 * 60


def minutes_of_day(at: datetime, local_timezone: Optional[tzinfo] = None) -> int:
    local = at.astimezone(local_timezone) if local_timezone is not None and at.tzinfo is not None else at
    return local.hour * 60 + local.minute


def current_and_next_entry(
    entries: Sequence[AlertEntry],
    at: datetime,
    *,
    local_timezone: Optional[tzinfo] = None,
) -> tuple[AlertEntry, Optional[AlertEntry]]:
    """Return the entry whose window contains ``at`` and the one after it.

    Entries are ordered by ``start``. A window runs until the next entry's
    start; the last window wraps past midnight until the first entry of the
    next day, which is then also the next entry.
    """

    if not entries:
        raise ValueError("At least one alert entry is required")

    ordered = sorted(entries, key=lambda entry: entry.start)
    if len(ordered) == 1:
        return ordered[0], None

    minute = minutes_of_day(at, local_timezone)
    current_index = len(ordered) - 1
    for index, entry in enumerate(ordered):
        if entry.start <= minute:
            current_index = index
        else:
            break

    next_index = (current_index + 1) % len(ordered)
    return ordered[current_index], ordered[next_index]


def validate_entries(entries: Sequence[AlertEntry]) -> None:
    """Raise ``ValueError`` for mixed kinds, bad starts or duplicate windows."""

    kinds = {entry.kind for entry in entries}
    if len(kinds) > 1:
        raise ValueError(f"Alert entries mix kinds: {sorted(kind.value for kind in kinds)}")
    starts: set[int] = set()
    for entry in entries:
        if not 0 <= entry.start < MINUTES_PER_DAY:
            raise ValueError(f"Alert entry start {entry.start} is outside a day")
        if entry.start in starts:
            raise ValueError(f"Duplicate alert entry start {entry.start} for {entry.kind.value}")
        starts.add(entry.start)
