from datetime import datetime, timedelta, timezone

import pytest

from cgm_alerts.engine import AlertEngine, plan_alert
from cgm_alerts.models import (
    AlertDecision,
    AlertEntry,
    AlertKind,
    AlertType,
    BgReading,
    Calibration,
)
from cgm_alerts.registry import CheckerRegistry, registry

NOW = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def _entry(kind: AlertKind, value: int, enabled: bool = True, start: int = 0) -> AlertEntry:
    return AlertEntry(kind=kind, value=value, alert_type=AlertType(enabled=enabled), start=start)


def _readings(*values_minutes_ago: tuple[float, int]) -> list[BgReading]:
    return [
        BgReading(timestamp=NOW - timedelta(minutes=minutes), calculated_value=value)
        for value, minutes in values_minutes_ago
    ]


def test_engine_plans_needed_alerts_only():
    engine = AlertEngine(registry, clock=lambda: NOW)
    entries = {
        AlertKind.LOW: [_entry(AlertKind.LOW, 70)],
        AlertKind.HIGH: [_entry(AlertKind.HIGH, 180)],
        AlertKind.MISSED_READING: [_entry(AlertKind.MISSED_READING, 30)],
        AlertKind.BATTERY_LOW: [_entry(AlertKind.BATTERY_LOW, 20)],
    }
    planned = engine.run(entries, _readings((72.0, 10), (65.0, 5), (0.0, 0)), battery_level=50)

    by_kind = {alert.kind: alert for alert in planned}
    assert set(by_kind) == {AlertKind.LOW, AlertKind.MISSED_READING}

    low = by_kind[AlertKind.LOW]
    assert low.notification_id == "lowAlert"
    assert low.title.startswith("Low Alert 65 mg/dL")
    assert low.body == "-7.0 mg/dL"
    assert low.fire_at == NOW

    missed = by_kind[AlertKind.MISSED_READING]
    assert missed.delay_seconds == 25 * 60
    assert missed.fire_at == NOW + timedelta(minutes=25)


def test_engine_uses_next_entry_for_missed_reading():
    engine = AlertEngine(registry, clock=lambda: NOW)
    entries = {
        AlertKind.MISSED_READING: [
            _entry(AlertKind.MISSED_READING, 30, enabled=False, start=0),
            _entry(AlertKind.MISSED_READING, 20, start=600),
        ]
    }
    planned = engine.run(entries, _readings((110.0, 25)))

    assert len(planned) == 1
    assert planned[0].delay_seconds == -300
    assert planned[0].fire_at == NOW


def test_engine_decide_respects_kind_filter():
    engine = AlertEngine(registry)
    entries = {
        AlertKind.CALIBRATION: [_entry(AlertKind.CALIBRATION, 4)],
        AlertKind.BATTERY_LOW: [_entry(AlertKind.BATTERY_LOW, 20)],
    }
    decisions = engine.decide(
        entries,
        calibration=Calibration(timestamp=NOW - timedelta(hours=5)),
        battery_level=10,
        kinds=[AlertKind.CALIBRATION],
        now=NOW,
    )
    assert list(decisions) == [AlertKind.CALIBRATION]
    assert decisions[AlertKind.CALIBRATION].needed is True


def test_engine_skips_kinds_without_entries():
    engine = AlertEngine(registry)
    assert engine.decide({}, _readings((50.0, 0)), now=NOW) == {}


def test_engine_requires_registered_checkers():
    engine = AlertEngine(CheckerRegistry())
    with pytest.raises(RuntimeError):
        engine.run({AlertKind.LOW: [_entry(AlertKind.LOW, 70)]}, now=NOW)


def test_plan_alert_rejects_unneeded_decision():
    with pytest.raises(ValueError):
        plan_alert(AlertKind.LOW, AlertDecision.not_needed(), NOW)
