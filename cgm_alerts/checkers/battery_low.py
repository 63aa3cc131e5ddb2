"""Transmitter battery low alert."""
from __future__ import annotations

from datetime import datetime

from ..alert_metadata import BATTERY_LOW_ALERT_TITLE
from ..display import BgFormatter
from ..models import AlertContext, AlertDecision, AlertKind
from ..registry import register_checker


@register_checker(AlertKind.BATTERY_LOW)
def check_battery_low(context: AlertContext, formatter: BgFormatter, now: datetime) -> AlertDecision:
    entry = context.current_entry
    if not entry.enabled or context.battery_level is None:
        return AlertDecision.not_needed()

    if entry.value > context.battery_level:
        return AlertDecision(needed=True, body="", title=BATTERY_LOW_ALERT_TITLE)
    return AlertDecision.not_needed()
