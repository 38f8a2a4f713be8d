"""
Unit tests for read-only telemetry queries.
"""

import pytest

from src.core.config import RedlineLimit
from src.data.sampling import (
    default_label,
    describe_columns,
    downsample,
    project,
    select_time_range,
)


def _records(n):
    return [{"mission_time_s": float(i), "flight_phase": "ascent", "a": i, "b": -i} for i in range(n)]


def test_select_time_range_inclusive_bounds():
    rows = select_time_range(_records(30), start_time=10, end_time=20)
    assert [r["mission_time_s"] for r in rows] == [float(i) for i in range(10, 21)]


def test_select_time_range_open_sides():
    assert len(select_time_range(_records(30), start_time=25)) == 5
    assert len(select_time_range(_records(30), end_time=4)) == 5
    assert len(select_time_range(_records(30))) == 30


def test_downsample_keeps_every_nth_record():
    rows = downsample(_records(11), max_points=5)
    # step = ceil(11 / 5) = 3
    assert [r["a"] for r in rows] == [0, 3, 6, 9]


def test_downsample_short_input_unchanged():
    records = _records(3)
    assert downsample(records, max_points=10) == records


def test_downsample_rejects_non_positive_limit():
    with pytest.raises(ValueError):
        downsample(_records(3), max_points=0)


def test_project_keeps_time_phase_and_requested_columns():
    rows = project(_records(2), ["b", "missing"])
    assert rows == [
        {"mission_time_s": 0.0, "flight_phase": "ascent", "b": 0},
        {"mission_time_s": 1.0, "flight_phase": "ascent", "b": -1},
    ]


def test_default_label():
    assert default_label("dynamic_pressure_pa") == "Dynamic Pressure Pa"
    assert default_label("o_f_ratio") == "O F Ratio"


def test_describe_columns_uses_redline_metadata():
    limits = {"a": RedlineLimit(min=0, max=10, unit="km", label="Altitude")}

    columns = {c.name: c for c in describe_columns(_records(2), limits)}

    assert columns["a"].label == "Altitude"
    assert columns["a"].unit == "km"
    assert columns["a"].has_redline is True
    assert columns["b"].label == "B"
    assert columns["b"].has_redline is False
    assert columns["flight_phase"].is_numeric is False
    assert columns["mission_time_s"].is_numeric is True


def test_describe_columns_empty_dataset():
    assert describe_columns([], {}) == []
