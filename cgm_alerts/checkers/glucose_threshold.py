"""Low, high, very low and very high glucose alerts."""
from __future__ import annotations

from datetime import datetime

from ..composer import compose_threshold_body, compose_threshold_title
from ..display import BgFormatter
from ..models import AlertContext, AlertDecision, AlertKind
from ..registry import register_checker


def _threshold_decision(kind: AlertKind, context: AlertContext, formatter: BgFormatter, *, below: bool) -> AlertDecision:
    entry = context.current_entry
    reading = context.last_reading
    if not entry.enabled or reading is None:
        return AlertDecision.not_needed()
    # callers should have filtered these out already
    if not reading.is_valid():
        return AlertDecision.not_needed()

    threshold = float(entry.value)
    crossed = reading.calculated_value < threshold if below else reading.calculated_value > threshold
    if not crossed:
        return AlertDecision.not_needed()

    return AlertDecision(
        needed=True,
        body=compose_threshold_body(reading, context.prior_reading, formatter),
        title=compose_threshold_title(reading, kind, formatter),
    )


@register_checker(AlertKind.LOW)
def check_low(context: AlertContext, formatter: BgFormatter, now: datetime) -> AlertDecision:
    return _threshold_decision(AlertKind.LOW, context, formatter, below=True)


@register_checker(AlertKind.VERY_LOW)
def check_very_low(context: AlertContext, formatter: BgFormatter, now: datetime) -> AlertDecision:
    return _threshold_decision(AlertKind.VERY_LOW, context, formatter, below=True)


@register_checker(AlertKind.HIGH)
def check_high(context: AlertContext, formatter: BgFormatter, now: datetime) -> AlertDecision:
    return _threshold_decision(AlertKind.HIGH, context, formatter, below=False)


@register_checker(AlertKind.VERY_HIGH)
def check_very_high(context: AlertContext, formatter: BgFormatter, now: datetime) -> AlertDecision:
    return _threshold_decision(AlertKind.VERY_HIGH, context, formatter, below=False)
