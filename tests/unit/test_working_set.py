"""
Unit tests for working-set construction.
"""

import math

import pytest

from src.core.exceptions import DataValidationError
from src.data.schema import TelemetryRecord
from src.data.working_set import (
    as_mapping,
    build_working_set,
    mission_time,
    normalize_records,
    numeric_value,
)


class TestNumericValue:
    """Test finite-number extraction."""

    def test_ints_and_floats_pass(self):
        assert numeric_value(3) == 3.0
        assert numeric_value(2.5) == 2.5
        assert numeric_value(-0.0) == 0.0

    @pytest.mark.parametrize("value", [None, "12", True, False, math.nan, math.inf, -math.inf, [1]])
    def test_non_finite_or_non_numeric_rejected(self, value):
        assert numeric_value(value) is None


class TestBuildWorkingSet:
    """Test mission-time filtering."""

    def test_keeps_valid_non_negative_times_in_order(self):
        records = [
            {"mission_time_s": 0.0, "p": 1},
            {"mission_time_s": -0.1, "p": 2},
            {"mission_time_s": 1.0, "p": 3},
            {"p": 4},
            {"mission_time_s": "2.0", "p": 5},
            {"mission_time_s": math.nan, "p": 6},
            {"mission_time_s": 2, "p": 7},
        ]

        working = build_working_set(records)

        assert [r["p"] for r in working] == [1, 3, 7]
        assert all(r["mission_time_s"] >= 0 for r in working)

    def test_custom_time_field(self):
        records = [{"t": 5.0}, {"mission_time_s": 1.0}]
        assert build_working_set(records, time_field="t") == [{"t": 5.0}]

    def test_empty_input(self):
        assert build_working_set([]) == []

    def test_mission_time_reads_configured_field(self):
        assert mission_time({"mission_time_s": 3}) == 3.0
        assert mission_time({"t": 7.5}, time_field="t") == 7.5


class TestNormalization:
    """Test record normalization."""

    def test_record_model_becomes_mapping(self):
        record = TelemetryRecord(mission_time_s=1.5, altitude_km=0.4)

        mapping = as_mapping(record)

        assert mapping["mission_time_s"] == 1.5
        assert mapping["altitude_km"] == 0.4
        assert mapping["flight_phase"] is None

    def test_mapping_passes_through(self):
        record = {"mission_time_s": 1.0}
        assert as_mapping(record) is record

    def test_non_mapping_raises(self):
        with pytest.raises(DataValidationError):
            normalize_records([{"mission_time_s": 0.0}, 42])
