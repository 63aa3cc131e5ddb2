"""Runtime settings read from the environment."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .models import GlucoseUnit, TransmitterType

_ENV_GLUCOSE_UNIT = "CGM_ALERTS_GLUCOSE_UNIT"
_ENV_TRANSMITTER_TYPE = "CGM_ALERTS_TRANSMITTER_TYPE"
_ENV_LOG_LEVEL = "CGM_ALERTS_LOG_LEVEL"


@dataclass(frozen=True)
class AlertSettings:
    """Display unit, transmitter model and log level."""

    glucose_unit: GlucoseUnit = GlucoseUnit.MG_DL
    transmitter_type: Optional[TransmitterType] = None
    log_level: str = "WARNING"


def parse_glucose_unit(raw: Optional[str]) -> GlucoseUnit:
    if not raw:
        return GlucoseUnit.MG_DL
    normalized = raw.strip().lower().replace(" ", "")
    if normalized in {"mmol", "mmol/l", "mmoll"}:
        return GlucoseUnit.MMOL_L
    if normalized in {"mgdl", "mg/dl"}:
        return GlucoseUnit.MG_DL
    raise ValueError(f"Unsupported glucose unit: {raw!r}")


def parse_transmitter_type(raw: Optional[str]) -> Optional[TransmitterType]:
    if not raw:
        return None
    try:
        return TransmitterType(raw.strip().lower())
    except ValueError:
        logging.warning(f"Ignoring unknown transmitter type {raw!r}")
        return None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> AlertSettings:
    env = os.environ if environ is None else environ
    return AlertSettings(
        glucose_unit=parse_glucose_unit(env.get(_ENV_GLUCOSE_UNIT)),
        transmitter_type=parse_transmitter_type(env.get(_ENV_TRANSMITTER_TYPE)),
        log_level=(env.get(_ENV_LOG_LEVEL) or "WARNING").upper(),
    )


def configure_logging(settings: AlertSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
