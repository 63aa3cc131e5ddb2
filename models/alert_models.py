"""
Alert evaluation request models.
"""
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class AlertKindEnum(str, Enum):
    LOW = "low"
    HIGH = "high"
    VERY_LOW = "very_low"
    VERY_HIGH = "very_high"
    MISSED_READING = "missed_reading"
    CALIBRATION = "calibration"
    BATTERY_LOW = "battery_low"


class AlertTypePayload(BaseModel):
    """
    Model for the delivery settings of an alert entry.
    """
    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="default", description="Alert type name")
    enabled: bool = Field(default=True, description="Whether alerts of this type fire")


class AlertEntryPayload(BaseModel):
    """
    Model for a configured alert entry.
    """
    model_config = ConfigDict(extra="ignore")

    alertKind: AlertKindEnum = Field(description="Alert kind")
    value: int = Field(description="Threshold, minutes, hours or battery level depending on kind")
    start: int = Field(default=0, ge=0, lt=1440, description="Minutes after local midnight")
    alertType: AlertTypePayload = Field(default_factory=AlertTypePayload, description="Alert type")


class BgReadingPayload(BaseModel):
    """
    Model for a glucose reading.
    """
    model_config = ConfigDict(extra="ignore")

    timestamp: str = Field(description="ISO 8601 timestamp")
    calculatedValue: float = Field(description="Glucose in mg/dL, 0 when invalid")
    hideSlope: bool = Field(default=False, description="Hide the trend arrow")


class CalibrationPayload(BaseModel):
    """
    Model for a calibration event.
    """
    model_config = ConfigDict(extra="ignore")

    timestamp: str = Field(description="ISO 8601 timestamp")
    bgValue: Optional[float] = Field(default=None, description="Reference glucose in mg/dL")
    sensorId: Optional[str] = Field(default=None, description="Sensor ID")


class AlertEvaluationRequest(BaseModel):
    """
    Request model for evaluating alerts.
    """
    model_config = ConfigDict(extra="ignore")

    alertEntries: List[AlertEntryPayload] = Field(default_factory=list, description="Alert entries")
    readings: List[BgReadingPayload] = Field(default_factory=list, description="Readings for the active sensor")
    lastCalibration: Optional[CalibrationPayload] = Field(default=None, description="Latest calibration")
    batteryLevel: Optional[int] = Field(default=None, description="Transmitter battery level")
    transmitterType: Optional[str] = Field(default=None, description="Transmitter type")
    glucoseUnit: Optional[str] = Field(default=None, description="mg/dL or mmol/L")
    timezone: Optional[str] = Field(default=None, description="IANA timezone for entry windows")
