from datetime import datetime, timezone

import pandas as pd
import pytest

from cgm_alerts.models import BgReading
from cgm_alerts.readings import latest_valid_readings, readings_from_frame


def test_readings_from_frame_sorts_and_computes_slope():
    frame = pd.DataFrame(
        {
            "timestamp": ["2025-01-01T08:05:00Z", "2025-01-01T08:00:00Z", "not-a-date"],
            "glucose_mg_dL": [110, 100, 90],
        }
    )
    readings = readings_from_frame(frame)

    assert [r.calculated_value for r in readings] == [100.0, 110.0]
    assert readings[0].calculated_value_slope == 0.0
    assert readings[1].calculated_value_slope * 60000 == pytest.approx(2.0)
    assert readings[1].timestamp == datetime(2025, 1, 1, 8, 5, tzinfo=timezone.utc)


def test_slope_not_computed_across_invalid_reading():
    frame = pd.DataFrame(
        {
            "timestamp": ["2025-01-01T08:00:00Z", "2025-01-01T08:05:00Z", "2025-01-01T08:10:00Z"],
            "glucose_mg_dL": [100, 0, 120],
            "hide_slope": [False, False, True],
        }
    )
    readings = readings_from_frame(frame)

    assert [r.calculated_value_slope for r in readings] == [0.0, 0.0, 0.0]
    assert readings[2].hide_slope is True


def test_readings_from_frame_missing_columns():
    assert readings_from_frame(pd.DataFrame({"timestamp": ["2025-01-01T08:00:00Z"]})) == []
    assert readings_from_frame(pd.DataFrame()) == []


def test_latest_valid_readings_skip_sentinel():
    readings = [
        BgReading(timestamp=datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc), calculated_value=100.0),
        BgReading(timestamp=datetime(2025, 1, 1, 8, 5, tzinfo=timezone.utc), calculated_value=105.0),
        BgReading(timestamp=datetime(2025, 1, 1, 8, 10, tzinfo=timezone.utc), calculated_value=0.0),
    ]
    last, prior = latest_valid_readings(readings)
    assert last.calculated_value == 105.0
    assert prior.calculated_value == 100.0


def test_latest_valid_readings_empty():
    assert latest_valid_readings([]) == (None, None)


def test_readings_from_frame_keeps_mixed_iso_variants():
    frame = pd.DataFrame(
        {
            "timestamp": [
                "2025-01-01T08:00:00Z",
                "2025-01-01T08:05:00.250Z",
                "2025-01-01T09:10:00+01:00",
            ],
            "glucose_mg_dL": [120, 65, 60],
        }
    )
    readings = readings_from_frame(frame)

    assert [r.calculated_value for r in readings] == [120.0, 65.0, 60.0]
    assert readings[1].timestamp == datetime(2025, 1, 1, 8, 5, 0, 250000, tzinfo=timezone.utc)
    assert readings[2].timestamp == datetime(2025, 1, 1, 8, 10, tzinfo=timezone.utc)


def test_latest_valid_readings_mixes_naive_and_aware_timestamps():
    readings = [
        BgReading(timestamp=datetime(2025, 1, 1, 8, 10), calculated_value=110.0),
        BgReading(timestamp=datetime(2025, 1, 1, 8, 5, tzinfo=timezone.utc), calculated_value=105.0),
        BgReading(timestamp=datetime(2025, 1, 1, 8, 0), calculated_value=100.0),
    ]
    last, prior = latest_valid_readings(readings)
    assert last.calculated_value == 110.0
    assert prior.calculated_value == 105.0
