"""Build readings from tabular history and select the ones alerts need."""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .clock import as_utc
from .models import BgReading

_REQUIRED_COLUMNS = ("timestamp", "glucose_mg_dL")
_EPOCH = pd.Timestamp("1970-01-01", tz="UTC")


def readings_from_frame(frame: pd.DataFrame) -> list[BgReading]:
    """Return chronologically ordered readings with slopes filled in.

    Rows with an unparseable timestamp or value are dropped. The slope of a
    reading is the change from the previous reading in mg/dL per millisecond;
    the first reading and readings after an invalid one get a slope of 0.
    """

    if frame.empty or any(column not in frame.columns for column in _REQUIRED_COLUMNS):
        return []

    df = frame.copy()
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True, errors="coerce", format="ISO8601")
    df["glucose_mg_dL"] = pd.to_numeric(df["glucose_mg_dL"], errors="coerce")
    df = df.dropna(subset=list(_REQUIRED_COLUMNS)).sort_values("timestamp")
    if df.empty:
        return []

    values = df["glucose_mg_dL"].astype(float).to_numpy()
    millis = ((df["timestamp"] - _EPOCH) // pd.Timedelta(milliseconds=1)).to_numpy(dtype="int64")
    slopes = np.zeros(len(values), dtype=float)
    if len(values) > 1:
        value_diff = np.diff(values)
        time_diff = np.diff(millis).astype(float)
        usable = (time_diff > 0) & (values[:-1] != 0.0) & (values[1:] != 0.0)
        slopes[1:] = np.divide(value_diff, time_diff, out=np.zeros_like(value_diff), where=usable)

    hide_slope = df["hide_slope"].fillna(False).astype(bool).to_numpy() if "hide_slope" in df.columns else None

    readings: list[BgReading] = []
    for index, (timestamp, value) in enumerate(zip(df["timestamp"], values)):
        readings.append(
            BgReading(
                timestamp=timestamp.to_pydatetime(),
                calculated_value=float(value),
                calculated_value_slope=float(slopes[index]),
                hide_slope=bool(hide_slope[index]) if hide_slope is not None else False,
            )
        )
    return readings


def latest_valid_readings(readings: Sequence[BgReading]) -> tuple[Optional[BgReading], Optional[BgReading]]:
    """Return the last and last-but-one readings that carry a real value."""

    valid = [reading for reading in sorted(readings, key=lambda r: as_utc(r.timestamp)) if reading.is_valid()]
    last = valid[-1] if valid else None
    prior = valid[-2] if len(valid) > 1 else None
    return last, prior
