"""Default display formatting for glucose values, deltas and trend arrows."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional, Protocol

from .clock import as_utc
from .models import BgReading, GlucoseUnit

MGDL_TO_MMOL: Final[float] = 0.0555
MAX_DELTA_MINUTES: Final[float] = 20.0
MAX_DELTA_MGDL: Final[float] = 100.0

# (upper bound in mg/dL per minute, arrow), checked in order
_SLOPE_ARROWS: Final[tuple[tuple[float, str], ...]] = (
    (-3.5, "⇊"),
    (-2.0, "↓"),
    (-1.0, "↘"),
    (1.0, "→"),
    (2.0, "↗"),
    (3.5, "↑"),
)
_STEEP_RISE_ARROW: Final[str] = "⇈"


class BgFormatter(Protocol):
    """Collaborator used by the composer to render reading details."""

    def value_to_string(self, mg_dl: float) -> str:
        ...

    def unit_label(self) -> str:
        ...

    def value_with_unit(self, mg_dl: float) -> str:
        ...

    def slope_arrow(self, reading: BgReading) -> str:
        ...

    def unitized_delta_string(
        self,
        reading: BgReading,
        previous: Optional[BgReading],
        *,
        show_unit: bool,
        high_granularity: bool,
    ) -> str:
        ...


def _strip_negative_zero(text: str) -> str:
    if text.startswith("-") and float(text) == 0.0:
        return text[1:]
    return text


@dataclass(frozen=True)
class GlucoseFormatter:
    """Formats readings in mg/dL or mmol/L."""

    unit: GlucoseUnit = GlucoseUnit.MG_DL

    @property
    def is_mgdl(self) -> bool:
        return self.unit is GlucoseUnit.MG_DL

    def unit_label(self) -> str:
        return self.unit.value

    def value_to_string(self, mg_dl: float) -> str:
        if self.is_mgdl:
            return f"{mg_dl:.0f}"
        return f"{mg_dl * MGDL_TO_MMOL:.1f}"

    def value_with_unit(self, mg_dl: float) -> str:
        return f"{self.value_to_string(mg_dl)} {self.unit_label()}"

    def slope_arrow(self, reading: BgReading) -> str:
        per_minute = reading.calculated_value_slope * 60000.0
        for upper_bound, arrow in _SLOPE_ARROWS:
            if per_minute <= upper_bound:
                return arrow
        return _STEEP_RISE_ARROW

    def unitized_delta_string(
        self,
        reading: BgReading,
        previous: Optional[BgReading],
        *,
        show_unit: bool = True,
        high_granularity: bool = True,
    ) -> str:
        """Signed difference between ``reading`` and ``previous``.

        Returns ``"???"`` when there is no usable previous reading and
        ``"ERR"`` for implausible jumps.
        """

        if previous is None:
            return "???"
        elapsed_minutes = (as_utc(reading.timestamp) - as_utc(previous.timestamp)).total_seconds() / 60.0
        if elapsed_minutes > MAX_DELTA_MINUTES:
            return "???"

        delta = reading.calculated_value - previous.calculated_value
        if abs(delta) > MAX_DELTA_MGDL:
            return "ERR"

        if self.is_mgdl:
            decimals = 1 if high_granularity else 0
        else:
            delta = delta * MGDL_TO_MMOL
            decimals = 2 if high_granularity else 1

        text = _strip_negative_zero(f"{delta:.{decimals}f}")
        sign = "+" if float(text) > 0 else ""
        suffix = f" {self.unit_label()}" if show_unit else ""
        return f"{sign}{text}{suffix}"


__all__ = ["BgFormatter", "GlucoseFormatter", "MGDL_TO_MMOL"]
