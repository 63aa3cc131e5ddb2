"""Evaluation driver turning readings and configuration into planned alerts."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Iterable, Mapping, Sequence

from . import checkers  # noqa: F401 - ensure checker registration side-effects
from .alert_metadata import logging_label, notification_channel_id
from .clock import Clock, utc_now
from .display import BgFormatter, GlucoseFormatter
from .evaluator import alert_needed_checker
from .models import (
    AlertContext,
    AlertDecision,
    AlertEntry,
    AlertKind,
    BgReading,
    Calibration,
    PlannedAlert,
)
from .readings import latest_valid_readings
from .registry import CheckerRegistry
from .schedule import current_and_next_entry


class AlertEngine:
    """Runs every registered checker for one evaluation tick."""

    def __init__(
        self,
        registry: CheckerRegistry,
        *,
        formatter: BgFormatter | None = None,
        clock: Clock | None = None,
        local_timezone: tzinfo | None = None,
    ) -> None:
        self._registry = registry
        self._formatter = formatter or GlucoseFormatter()
        self._clock = clock or utc_now
        self._local_timezone = local_timezone

    def decide(
        self,
        entries_by_kind: Mapping[AlertKind, Sequence[AlertEntry]],
        readings: Sequence[BgReading] = (),
        *,
        calibration: Calibration | None = None,
        battery_level: int | None = None,
        kinds: Iterable[AlertKind] | None = None,
        now: datetime | None = None,
    ) -> dict[AlertKind, AlertDecision]:
        """Return the decision for every kind that has configuration."""

        if len(self._registry) == 0:
            raise RuntimeError("No alert checkers are registered. Ensure cgm_alerts.checkers is imported.")

        moment = now or self._clock()
        last_reading, prior_reading = latest_valid_readings(readings)
        selected = list(kinds) if kinds is not None else self._registry.kinds()

        decisions: dict[AlertKind, AlertDecision] = {}
        for kind in selected:
            entries = entries_by_kind.get(kind)
            if not entries:
                logging.debug(f"No alert entries configured for {logging_label(kind)}, skipping")
                continue
            current_entry, next_entry = current_and_next_entry(entries, moment, local_timezone=self._local_timezone)
            context = AlertContext(
                current_entry=current_entry,
                next_entry=next_entry,
                last_reading=last_reading,
                prior_reading=prior_reading,
                last_calibration=calibration,
                battery_level=battery_level,
                now=moment,
            )
            checker = alert_needed_checker(kind, formatter=self._formatter, registry=self._registry)
            decisions[kind] = checker(context)
        return decisions

    def run(
        self,
        entries_by_kind: Mapping[AlertKind, Sequence[AlertEntry]],
        readings: Sequence[BgReading] = (),
        *,
        calibration: Calibration | None = None,
        battery_level: int | None = None,
        kinds: Iterable[AlertKind] | None = None,
        now: datetime | None = None,
    ) -> list[PlannedAlert]:
        """Evaluate all kinds and return a notification plan for the needed ones."""

        moment = now or self._clock()
        decisions = self.decide(
            entries_by_kind,
            readings,
            calibration=calibration,
            battery_level=battery_level,
            kinds=kinds,
            now=moment,
        )

        planned: list[PlannedAlert] = []
        for kind, decision in decisions.items():
            if not decision.needed:
                continue
            alert = plan_alert(kind, decision, moment)
            logging.info(
                f"Planned {logging_label(kind)} alert '{alert.title}' at {alert.fire_at.isoformat()}"
            )
            planned.append(alert)
        return planned


def plan_alert(kind: AlertKind, decision: AlertDecision, now: datetime) -> PlannedAlert:
    """Resolve a needed decision; an absent or non-positive delay fires at ``now``."""

    if not decision.needed:
        raise ValueError(f"Cannot plan a {kind.value} alert that is not needed")
    delay = decision.delay_seconds
    fire_at = now + timedelta(seconds=delay) if delay is not None and delay > 0 else now
    return PlannedAlert(
        kind=kind,
        notification_id=notification_channel_id(kind),
        title=decision.title or "",
        body=decision.body or "",
        fire_at=fire_at,
        delay_seconds=delay,
    )
