"""Static metadata for each alert kind."""
from __future__ import annotations

from typing import Optional

from .models import AlertEntry, AlertKind, AlertType, TransmitterType

LOW_ALERT_TITLE = "Low Alert"
HIGH_ALERT_TITLE = "High Alert"
VERY_LOW_ALERT_TITLE = "Very Low Alert"
VERY_HIGH_ALERT_TITLE = "Very High Alert"
MISSED_READING_ALERT_TITLE = "Missed Reading Alert"
CALIBRATION_NEEDED_ALERT_TITLE = "Calibration Needed Alert"
BATTERY_LOW_ALERT_TITLE = "Transmitter Battery Low"

DEFAULT_LOW = 70
DEFAULT_HIGH = 170
DEFAULT_VERY_LOW = 50
DEFAULT_VERY_HIGH = 250
DEFAULT_MISSED_READING_MINUTES = 30
DEFAULT_CALIBRATION_HOURS = 24
DEFAULT_BATTERY_LEVEL_MIAOMIAO = 20

BATTERY_ALERT_DEFAULTS: dict[TransmitterType, int] = {
    TransmitterType.DEXCOM_G4: 210,
    TransmitterType.DEXCOM_G5: 300,
    TransmitterType.DEXCOM_G6: 300,
    TransmitterType.MIAOMIAO: DEFAULT_BATTERY_LEVEL_MIAOMIAO,
    TransmitterType.BUBBLE: 20,
    TransmitterType.BLUCON: 20,
    TransmitterType.GNSENTRY: 20,
    TransmitterType.DROPLET: 20,
    TransmitterType.WATLAA: 20,
    TransmitterType.LIBRE2: 20,
}

ALERT_METADATA: dict[AlertKind, dict[str, object]] = {
    AlertKind.LOW: {
        "logging_label": "low",
        "notification_id": "lowAlert",
        "picker_title": LOW_ALERT_TITLE,
        "default_value": DEFAULT_LOW,
        "needs_value": True,
    },
    AlertKind.HIGH: {
        "logging_label": "high",
        "notification_id": "highAlert",
        "picker_title": HIGH_ALERT_TITLE,
        "default_value": DEFAULT_HIGH,
        "needs_value": True,
    },
    AlertKind.VERY_LOW: {
        "logging_label": "verylow",
        "notification_id": "veryLowAlert",
        "picker_title": VERY_LOW_ALERT_TITLE,
        "default_value": DEFAULT_VERY_LOW,
        "needs_value": True,
    },
    AlertKind.VERY_HIGH: {
        "logging_label": "veryhigh",
        "notification_id": "veryHighAlert",
        "picker_title": VERY_HIGH_ALERT_TITLE,
        "default_value": DEFAULT_VERY_HIGH,
        "needs_value": True,
    },
    AlertKind.MISSED_READING: {
        "logging_label": "missedreading",
        "notification_id": "missedReadingAlert",
        "picker_title": MISSED_READING_ALERT_TITLE,
        "default_value": DEFAULT_MISSED_READING_MINUTES,
        "needs_value": True,
    },
    AlertKind.CALIBRATION: {
        "logging_label": "calibration",
        "notification_id": "subsequentCalibrationRequest",
        "picker_title": CALIBRATION_NEEDED_ALERT_TITLE,
        "default_value": DEFAULT_CALIBRATION_HOURS,
        "needs_value": True,
    },
    AlertKind.BATTERY_LOW: {
        "logging_label": "batterylow",
        "notification_id": "batteryLow",
        "picker_title": BATTERY_LOW_ALERT_TITLE,
        "default_value": None,
        "needs_value": True,
    },
}


def needs_value(kind: AlertKind) -> bool:
    """Whether entries of this kind carry a configurable value."""

    return bool(ALERT_METADATA[kind]["needs_value"])


def default_value(kind: AlertKind, transmitter_type: Optional[TransmitterType] = None) -> int:
    """Seed value for a newly created entry of ``kind``.

    Only ``battery_low`` looks at ``transmitter_type``; without one the
    MiaoMiao level applies.
    """

    if kind is AlertKind.BATTERY_LOW:
        if transmitter_type is None:
            return DEFAULT_BATTERY_LEVEL_MIAOMIAO
        return BATTERY_ALERT_DEFAULTS.get(transmitter_type, DEFAULT_BATTERY_LEVEL_MIAOMIAO)
    return int(ALERT_METADATA[kind]["default_value"])  # type: ignore[arg-type]


def logging_label(kind: AlertKind) -> str:
    return str(ALERT_METADATA[kind]["logging_label"])


def notification_channel_id(kind: AlertKind) -> str:
    return str(ALERT_METADATA[kind]["notification_id"])


def picker_title(kind: AlertKind) -> str:
    return str(ALERT_METADATA[kind]["picker_title"])


def default_alert_entries(transmitter_type: Optional[TransmitterType] = None) -> dict[AlertKind, list[AlertEntry]]:
    """One enabled all-day entry per kind, as created on first start."""

    return {
        kind: [AlertEntry(kind=kind, value=default_value(kind, transmitter_type), alert_type=AlertType(), start=0)]
        for kind in AlertKind
    }


__all__ = [
    "ALERT_METADATA",
    "BATTERY_ALERT_DEFAULTS",
    "default_alert_entries",
    "default_value",
    "logging_label",
    "needs_value",
    "notification_channel_id",
    "picker_title",
]
