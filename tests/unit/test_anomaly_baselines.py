"""
Unit tests for baseline statistics.
"""

from math import isclose, isfinite, sqrt

from src.anomaly.baselines import (
    StatisticsAggregator,
    describe_numeric_columns,
    describe_parameter,
    numeric_columns,
)


def test_population_statistics(series):
    records = series("p", [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])

    baselines = StatisticsAggregator().compute(records, ["p"])

    stats = baselines["p"]
    assert isclose(stats.mean, 5.0)
    # Population std of this classic sample is exactly 2.
    assert isclose(stats.std, 2.0)
    assert stats.min == 2.0
    assert stats.max == 9.0
    assert stats.count == 8


def test_invalid_values_ignored(series):
    records = series("p", [1.0, None, "bad", float("nan"), 3.0, True])

    stats = StatisticsAggregator().compute(records, ["p"])["p"]

    assert stats.count == 2
    assert isclose(stats.mean, 2.0)
    assert isclose(stats.std, 1.0)


def test_parameter_without_values_is_absent(series):
    records = series("p", [None, None])
    baselines = StatisticsAggregator().compute(records, ["p", "not_present"])
    assert baselines == {}


def test_constant_series_has_zero_std(series):
    stats = StatisticsAggregator().compute(series("p", [7.0] * 10), ["p"])["p"]
    assert stats.std == 0.0


def test_extreme_constant_series_stays_finite(series):
    stats = StatisticsAggregator().compute(series("p", [1e308] * 30), ["p"])["p"]

    assert isfinite(stats.mean)
    assert isclose(stats.mean, 1e308)
    assert stats.std == 0.0


def test_describe_parameter_quartiles_by_index(series):
    records = series("p", [float(v) for v in [9, 1, 8, 2, 7, 3, 6, 4, 5, 10]])

    stats = describe_parameter(records, "p")

    # sorted: 1..10; median index 5, q1 index 2, q3 index 7
    assert stats.count == 10
    assert stats.median == 6.0
    assert stats.q1 == 3.0
    assert stats.q3 == 8.0
    assert stats.iqr == 5.0
    assert stats.mean == 5.5
    assert stats.std == round(sqrt(8.25), 4)


def test_describe_parameter_no_values(series):
    assert describe_parameter(series("p", [None]), "p") is None


def test_describe_numeric_columns_skips_time_and_text():
    records = [
        {"mission_time_s": 0.0, "flight_phase": "ascent", "a": 1.0},
        {"mission_time_s": 1.0, "flight_phase": "ascent", "a": 3.0},
    ]

    assert numeric_columns(records) == ["a"]
    stats = describe_numeric_columns(records)
    assert list(stats) == ["a"]
    assert stats["a"].mean == 2.0
