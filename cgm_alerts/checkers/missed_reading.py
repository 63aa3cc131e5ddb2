"""Plan a delayed notification for when the next reading is overdue."""
from __future__ import annotations

from datetime import datetime

from ..alert_metadata import MISSED_READING_ALERT_TITLE
from ..clock import as_utc
from ..display import BgFormatter
from ..models import AlertContext, AlertDecision, AlertEntry, AlertKind
from ..registry import register_checker


def _select_entry(context: AlertContext) -> AlertEntry | None:
    if context.current_entry.enabled:
        return context.current_entry
    if context.next_entry is not None and context.next_entry.enabled:
        return context.next_entry
    return None


def minutes_since(timestamp: datetime, now: datetime) -> int:
    """Whole minutes elapsed, truncated toward zero."""

    return int((as_utc(now) - as_utc(timestamp)).total_seconds() / 60)


@register_checker(AlertKind.MISSED_READING)
def check_missed_reading(context: AlertContext, formatter: BgFormatter, now: datetime) -> AlertDecision:
    """The delay is not clamped; a negative value means the reading is already overdue."""

    reading = context.last_reading
    if reading is None:
        return AlertDecision.not_needed()

    entry = _select_entry(context)
    if entry is None:
        return AlertDecision.not_needed()

    delay_seconds = (int(entry.value) - minutes_since(reading.timestamp, now)) * 60
    return AlertDecision(
        needed=True,
        body="",
        title=MISSED_READING_ALERT_TITLE,
        delay_seconds=delay_seconds,
    )
