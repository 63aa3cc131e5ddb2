"""Alert text for glucose threshold alerts."""
from __future__ import annotations

from .alert_metadata import picker_title
from .display import BgFormatter
from .models import AlertKind, BgReading


def compose_threshold_title(reading: BgReading, kind: AlertKind, formatter: BgFormatter) -> str:
    """Return e.g. ``"Low Alert 65 mg/dL ↘"``; empty for non-glucose kinds."""

    if not kind.is_glucose_threshold:
        return ""

    title = f"{picker_title(kind)} {formatter.value_with_unit(reading.calculated_value)}"
    if not reading.hide_slope:
        title = f"{title} {formatter.slope_arrow(reading)}"
    return title


def compose_threshold_body(reading: BgReading, previous: BgReading | None, formatter: BgFormatter) -> str:
    return formatter.unitized_delta_string(reading, previous, show_unit=True, high_granularity=True)
