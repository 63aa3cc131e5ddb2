"""Calibration due alert."""
from __future__ import annotations

from datetime import datetime

from ..alert_metadata import CALIBRATION_NEEDED_ALERT_TITLE
from ..clock import as_utc
from ..display import BgFormatter
from ..models import AlertContext, AlertDecision, AlertKind
from ..registry import register_checker


@register_checker(AlertKind.CALIBRATION)
def check_calibration(context: AlertContext, formatter: BgFormatter, now: datetime) -> AlertDecision:
    entry = context.current_entry
    calibration = context.last_calibration
    if not entry.enabled or calibration is None:
        return AlertDecision.not_needed()

    elapsed_seconds = abs((as_utc(now) - as_utc(calibration.timestamp)).total_seconds())
    if elapsed_seconds > int(entry.value) * 3600:
        return AlertDecision(needed=True, body="", title=CALIBRATION_NEEDED_ALERT_TITLE)
    return AlertDecision.not_needed()
