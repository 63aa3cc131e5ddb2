"""Conversion from request payload models into evaluation inputs."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Mapping, Optional, Sequence

import pandas as pd
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from models.alert_models import (
    AlertEntryPayload,
    AlertEvaluationRequest,
    BgReadingPayload,
    CalibrationPayload,
)

from .config import AlertSettings, parse_transmitter_type, parse_glucose_unit
from .models import AlertEntry, AlertKind, AlertType, BgReading, Calibration
from .readings import readings_from_frame
from .schedule import validate_entries


@dataclass(frozen=True)
class EvaluationInputs:
    """Everything the engine needs for one evaluation tick."""

    entries_by_kind: Mapping[AlertKind, Sequence[AlertEntry]]
    readings: Sequence[BgReading] = field(default_factory=tuple)
    calibration: Optional[Calibration] = None
    battery_level: Optional[int] = None
    settings: AlertSettings = field(default_factory=AlertSettings)
    local_timezone: Optional[tzinfo] = None


def _parse_timestamp(value: str) -> datetime:
    parsed = pd.to_datetime(value, utc=True, errors="coerce", format="ISO8601")
    if pd.isna(parsed):
        raise ValueError(f"Invalid timestamp: {value!r}")
    return parsed.to_pydatetime()


def convert_alert_entry(payload: AlertEntryPayload) -> AlertEntry:
    alert_type = AlertType(
        name=payload.alertType.name,
        enabled=payload.alertType.enabled,
    )
    return AlertEntry(
        kind=AlertKind(payload.alertKind.value),
        value=payload.value,
        alert_type=alert_type,
        start=payload.start,
    )


def group_entries(entries: Sequence[AlertEntry]) -> dict[AlertKind, list[AlertEntry]]:
    grouped: dict[AlertKind, list[AlertEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.kind, []).append(entry)
    for kind_entries in grouped.values():
        kind_entries.sort(key=lambda entry: entry.start)
        validate_entries(kind_entries)
    return grouped


def convert_readings(payloads: Sequence[BgReadingPayload]) -> list[BgReading]:
    frame = pd.DataFrame(
        {
            "timestamp": [payload.timestamp for payload in payloads],
            "glucose_mg_dL": [payload.calculatedValue for payload in payloads],
            "hide_slope": [payload.hideSlope for payload in payloads],
        }
    )
    readings = readings_from_frame(frame)
    dropped = len(payloads) - len(readings)
    if dropped:
        logging.warning(f"Dropped {dropped} reading(s) with unparseable timestamp or value")
    return readings


def convert_calibration(payload: Optional[CalibrationPayload]) -> Optional[Calibration]:
    if payload is None:
        return None
    return Calibration(
        timestamp=_parse_timestamp(payload.timestamp),
        bg_value=payload.bgValue,
        sensor_id=payload.sensorId,
    )


def _resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        raise ValueError(f"Unknown timezone: {name!r}") from None


def convert_request(request: AlertEvaluationRequest, defaults: Optional[AlertSettings] = None) -> EvaluationInputs:
    """Build engine inputs; request fields override ``defaults``."""

    base = defaults or AlertSettings()
    settings = AlertSettings(
        glucose_unit=parse_glucose_unit(request.glucoseUnit) if request.glucoseUnit else base.glucose_unit,
        transmitter_type=parse_transmitter_type(request.transmitterType) if request.transmitterType else base.transmitter_type,
        log_level=base.log_level,
    )
    entries = [convert_alert_entry(payload) for payload in request.alertEntries]
    return EvaluationInputs(
        entries_by_kind=group_entries(entries),
        readings=tuple(convert_readings(request.readings)),
        calibration=convert_calibration(request.lastCalibration),
        battery_level=request.batteryLevel,
        settings=settings,
        local_timezone=_resolve_timezone(request.timezone),
    )
