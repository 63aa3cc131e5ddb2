"""Core data models for CGM alert evaluation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

_ALERT_KIND_CODES: dict[str, int] = {
    "low": 0,
    "high": 1,
    "very_low": 2,
    "very_high": 3,
    "missed_reading": 4,
    "calibration": 5,
    "battery_low": 6,
}


class AlertKind(str, Enum):
    """The fixed set of alert kinds."""

    LOW = "low"
    HIGH = "high"
    VERY_LOW = "very_low"
    VERY_HIGH = "very_high"
    MISSED_READING = "missed_reading"
    CALIBRATION = "calibration"
    BATTERY_LOW = "battery_low"

    @property
    def code(self) -> int:
        """Stable integer code used by stored configurations."""

        return _ALERT_KIND_CODES[self.value]

    @classmethod
    def from_code(cls, code: int) -> "AlertKind":
        for kind in cls:
            if kind.code == code:
                return kind
        raise ValueError(f"Unknown alert kind code: {code}")

    @property
    def is_glucose_threshold(self) -> bool:
        return self in _GLUCOSE_THRESHOLD_KINDS


_GLUCOSE_THRESHOLD_KINDS = frozenset(
    {AlertKind.LOW, AlertKind.HIGH, AlertKind.VERY_LOW, AlertKind.VERY_HIGH}
)


class TransmitterType(str, Enum):
    """Transmitter models with their own battery alert defaults."""

    DEXCOM_G4 = "dexcom_g4"
    DEXCOM_G5 = "dexcom_g5"
    DEXCOM_G6 = "dexcom_g6"
    MIAOMIAO = "miaomiao"
    BUBBLE = "bubble"
    BLUCON = "blucon"
    GNSENTRY = "gnsentry"
    DROPLET = "droplet"
    WATLAA = "watlaa"
    LIBRE2 = "libre2"


class GlucoseUnit(str, Enum):
    MG_DL = "mg/dL"
    MMOL_L = "mmol/L"


@dataclass(frozen=True)
class AlertType:
    """How an alert is delivered; the evaluator only reads ``enabled``."""

    name: str = "default"
    enabled: bool = True


@dataclass(frozen=True)
class AlertEntry:
    """A user configured threshold for one alert kind.

    ``value`` is interpreted per kind: a glucose threshold in mg/dL, minutes
    for missed readings, hours for calibration and a level for the battery.
    ``start`` is the number of minutes after local midnight from which the
    entry applies.
    """

    kind: AlertKind
    value: int
    alert_type: AlertType = field(default_factory=AlertType)
    start: int = 0

    @property
    def enabled(self) -> bool:
        return self.alert_type.enabled


@dataclass(frozen=True)
class BgReading:
    """A single glucose measurement.

    ``calculated_value`` of 0.0 marks a reading that is not a real measurement.
    ``calculated_value_slope`` is expressed in mg/dL per millisecond.
    """

    timestamp: datetime
    calculated_value: float
    calculated_value_slope: float = 0.0
    hide_slope: bool = False

    def is_valid(self) -> bool:
        return self.calculated_value != 0.0


@dataclass(frozen=True)
class Calibration:
    """A calibration event for the active sensor."""

    timestamp: datetime
    bg_value: Optional[float] = None
    sensor_id: Optional[str] = None


@dataclass(frozen=True)
class AlertContext:
    """Inputs available to a single alert evaluation.

    Readers per kind:

    * low, high, very low, very high: ``current_entry``, ``last_reading`` and
      ``prior_reading`` (the latter only for the delta in the body)
    * missed reading: ``current_entry``, ``next_entry``, ``last_reading``, ``now``
    * calibration: ``current_entry``, ``last_calibration``, ``now``
    * battery low: ``current_entry``, ``battery_level``

    Readings and calibration must belong to the active sensor.
    """

    current_entry: AlertEntry
    next_entry: Optional[AlertEntry] = None
    last_reading: Optional[BgReading] = None
    prior_reading: Optional[BgReading] = None
    last_calibration: Optional[Calibration] = None
    battery_level: Optional[int] = None
    now: Optional[datetime] = None


@dataclass(frozen=True)
class AlertDecision:
    """Standardized output for a single alert evaluation."""

    needed: bool
    body: Optional[str] = None
    title: Optional[str] = None
    delay_seconds: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.needed:
            if self.body is not None or self.title is not None or self.delay_seconds is not None:
                raise ValueError("A decision that is not needed cannot carry body, title or delay")
        elif self.title is None:
            raise ValueError("A needed decision must carry a title")

    @classmethod
    def not_needed(cls) -> "AlertDecision":
        return cls(needed=False)


@dataclass(frozen=True)
class PlannedAlert:
    """A needed decision resolved into a notification request."""

    kind: AlertKind
    notification_id: str
    title: str
    body: str
    fire_at: datetime
    delay_seconds: Optional[int] = None
