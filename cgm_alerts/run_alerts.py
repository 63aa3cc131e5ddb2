"""Command-line utility for evaluating alerts from a JSON request file.

The request file follows ``models.alert_models.AlertEvaluationRequest``::

    {
        "alertEntries": [
            {"alertKind": "low", "value": 70, "start": 0, "alertType": {"enabled": true}}
        ],
        "readings": [
            {"timestamp": "2025-01-01T08:00:00Z", "calculatedValue": 72},
            {"timestamp": "2025-01-01T08:05:00Z", "calculatedValue": 65}
        ],
        "lastCalibration": {"timestamp": "2024-12-31T20:00:00Z"},
        "batteryLevel": 15
    }

Planned alerts are written as JSON to stdout or to ``--output`` if provided.
"""
from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from models.alert_models import AlertEvaluationRequest

from .alert_metadata import default_alert_entries
from .config import configure_logging, load_settings
from .display import GlucoseFormatter
from .engine import AlertEngine
from .models import AlertKind, PlannedAlert
from .payloads import EvaluationInputs, convert_request
from .registry import registry


def load_request(path: Path) -> AlertEvaluationRequest:
    if not path.is_file():
        raise FileNotFoundError(f"Alert request file not found: {path}")
    with path.open(encoding="utf-8") as handle:
        return AlertEvaluationRequest.model_validate(json.load(handle))


def _parse_now(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _planned_to_dict(alert: PlannedAlert) -> dict[str, Any]:
    return {
        "kind": alert.kind.value,
        "notification_id": alert.notification_id,
        "title": alert.title,
        "body": alert.body,
        "fire_at": alert.fire_at.isoformat(),
        "delay_seconds": alert.delay_seconds,
    }


def run(
    inputs: EvaluationInputs,
    *,
    now: datetime | None = None,
    seed_defaults: bool = False,
    kinds: set[AlertKind] | None = None,
) -> list[dict[str, Any]]:
    entries_by_kind = dict(inputs.entries_by_kind)
    if seed_defaults:
        for kind, entries in default_alert_entries(inputs.settings.transmitter_type).items():
            entries_by_kind.setdefault(kind, entries)

    engine = AlertEngine(
        registry,
        formatter=GlucoseFormatter(inputs.settings.glucose_unit),
        local_timezone=inputs.local_timezone,
    )
    planned = engine.run(
        entries_by_kind,
        inputs.readings,
        calibration=inputs.calibration,
        battery_level=inputs.battery_level,
        kinds=sorted(kinds, key=lambda kind: kind.code) if kinds else None,
        now=now,
    )
    return [_planned_to_dict(alert) for alert in planned]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate CGM alerts for a JSON request")
    parser.add_argument("request_file", type=Path, help="JSON file with alert entries and readings")
    parser.add_argument("--now", type=str, help="Evaluation time (ISO 8601, default: current UTC time)")
    parser.add_argument(
        "--kinds",
        nargs="*",
        choices=[kind.value for kind in AlertKind],
        help="Alert kinds to evaluate (default: all)",
    )
    parser.add_argument(
        "--seed-defaults",
        action="store_true",
        help="Use default entries for kinds without configuration.",
    )
    parser.add_argument("--output", type=Path, help="Optional path to write JSON output")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings)

    inputs = convert_request(load_request(args.request_file), settings)
    kinds = {AlertKind(value) for value in args.kinds} if args.kinds else None
    results = run(inputs, now=_parse_now(args.now), seed_defaults=args.seed_defaults, kinds=kinds)
    logging.info(f"Evaluated {args.request_file}: {len(results)} alert(s) planned")

    if args.output:
        args.output.write_text(json.dumps(results, indent=2, ensure_ascii=False), encoding="utf-8")
    else:
        print(json.dumps(results, indent=2, ensure_ascii=False))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
