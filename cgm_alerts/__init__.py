"""CGM alert decision library."""

from .models import (
    AlertContext,
    AlertDecision,
    AlertEntry,
    AlertKind,
    AlertType,
    BgReading,
    Calibration,
    GlucoseUnit,
    PlannedAlert,
    TransmitterType,
)
from .registry import register_checker, registry
from .evaluator import alert_needed_checker, evaluate

__all__ = [
    "AlertContext",
    "AlertDecision",
    "AlertEntry",
    "AlertKind",
    "AlertType",
    "BgReading",
    "Calibration",
    "GlucoseUnit",
    "PlannedAlert",
    "TransmitterType",
    "alert_needed_checker",
    "evaluate",
    "register_checker",
    "registry",
]
