import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from cgm_alerts.payloads import convert_request
from cgm_alerts.run_alerts import load_request, main, run


def _write_request(tmp_path: Path) -> Path:
    request = {
        "alertEntries": [
            {"alertKind": "low", "value": 70},
            {"alertKind": "missed_reading", "value": 30},
            {"alertKind": "calibration", "value": 12},
        ],
        "readings": [
            {"timestamp": "2025-01-01T08:00:00Z", "calculatedValue": 72},
            {"timestamp": "2025-01-01T08:05:00Z", "calculatedValue": 65},
        ],
        "lastCalibration": {"timestamp": "2025-01-01T06:00:00Z"},
        "batteryLevel": 10,
    }
    path = tmp_path / "request.json"
    path.write_text(json.dumps(request))
    return path


def test_main_writes_planned_alerts(tmp_path: Path):
    request_path = _write_request(tmp_path)
    output = tmp_path / "out.json"

    exit_code = main([str(request_path), "--now", "2025-01-01T08:10:00Z", "--output", str(output)])

    assert exit_code == 0
    results = json.loads(output.read_text(encoding="utf-8"))
    kinds = [item["kind"] for item in results]
    assert kinds == ["low", "missed_reading"]
    missed = results[1]
    assert missed["delay_seconds"] == 25 * 60
    assert missed["fire_at"] == "2025-01-01T08:35:00+00:00"
    assert missed["notification_id"] == "missedReadingAlert"


def test_main_prints_to_stdout(tmp_path: Path, capsys):
    request_path = _write_request(tmp_path)

    main([str(request_path), "--now", "2025-01-01T08:10:00Z", "--kinds", "low"])

    results = json.loads(capsys.readouterr().out)
    assert [item["kind"] for item in results] == ["low"]
    assert results[0]["body"] == "-7.0 mg/dL"


def test_seed_defaults_adds_unconfigured_kinds(tmp_path: Path):
    inputs = convert_request(load_request(_write_request(tmp_path)))
    results = run(
        inputs,
        now=datetime(2025, 1, 1, 8, 10, tzinfo=timezone.utc),
        seed_defaults=True,
    )

    kinds = {item["kind"] for item in results}
    assert "battery_low" in kinds
    assert "very_low" not in kinds


def test_load_request_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_request(tmp_path / "missing.json")


def test_fractional_second_reading_drives_low_alert(tmp_path: Path):
    request = {
        "alertEntries": [
            {"alertKind": "low", "value": 70},
            {"alertKind": "missed_reading", "value": 30},
        ],
        "readings": [
            {"timestamp": "2025-01-01T08:00:00Z", "calculatedValue": 120},
            {"timestamp": "2025-01-01T08:05:00.250Z", "calculatedValue": 65},
        ],
    }
    path = tmp_path / "request.json"
    path.write_text(json.dumps(request))

    inputs = convert_request(load_request(path))
    assert [reading.calculated_value for reading in inputs.readings] == [120.0, 65.0]

    results = run(inputs, now=datetime(2025, 1, 1, 8, 6, tzinfo=timezone.utc))
    by_kind = {item["kind"]: item for item in results}
    assert set(by_kind) == {"low", "missed_reading"}
    assert by_kind["low"]["title"].startswith("Low Alert 65 mg/dL")
    assert by_kind["missed_reading"]["delay_seconds"] == 30 * 60
