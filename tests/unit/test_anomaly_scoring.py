"""
Unit tests for severity mapping.
"""

import pytest

from src.anomaly.schema import AnomalySeverity
from src.anomaly.scoring import SeverityMapper, overall_severity
from src.core.config import DetectionConfig


@pytest.fixture
def mapper():
    return SeverityMapper(DetectionConfig())


@pytest.mark.parametrize(
    "z, expected",
    [
        (3.5, AnomalySeverity.CAUTION),
        (4.0, AnomalySeverity.CAUTION),
        (4.01, AnomalySeverity.WARNING),
        (5.0, AnomalySeverity.WARNING),
        (5.01, AnomalySeverity.CRITICAL),
    ],
)
def test_zscore_tiers_are_strict(mapper, z, expected):
    assert mapper.zscore_severity(z) == expected


def test_rate_change_tiers(mapper):
    assert mapper.rate_change_severity(11.0, threshold=10.0) == AnomalySeverity.CAUTION
    assert mapper.rate_change_severity(20.0, threshold=10.0) == AnomalySeverity.CAUTION
    assert mapper.rate_change_severity(20.5, threshold=10.0) == AnomalySeverity.WARNING
    assert mapper.rate_change_severity(30.5, threshold=10.0) == AnomalySeverity.CRITICAL


def test_redline_tiers(mapper):
    assert mapper.redline_severity(5.0) == AnomalySeverity.CAUTION
    assert mapper.redline_severity(5.1) == AnomalySeverity.WARNING
    assert mapper.redline_severity(10.0) == AnomalySeverity.WARNING
    assert mapper.redline_severity(10.1) == AnomalySeverity.CRITICAL


def test_sustained_tiers(mapper):
    assert mapper.sustained_severity(2.5) == AnomalySeverity.CAUTION
    assert mapper.sustained_severity(3.5) == AnomalySeverity.WARNING
    assert mapper.sustained_severity(4.5) == AnomalySeverity.CRITICAL


def test_overall_severity():
    assert overall_severity(AnomalySeverity.CAUTION) == AnomalySeverity.CAUTION
    assert overall_severity(
        AnomalySeverity.CAUTION, AnomalySeverity.CRITICAL, AnomalySeverity.WARNING
    ) == AnomalySeverity.CRITICAL
    with pytest.raises(ValueError):
        overall_severity()
