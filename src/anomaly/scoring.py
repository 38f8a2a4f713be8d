"""
Severity mapping for anomalies.

Maps each detector's deviation metric to a severity tier with configurable
thresholds. All tier boundaries are strict: a metric exactly on a boundary
stays in the lower tier.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.config import DetectionConfig

from .schema import AnomalySeverity


SEVERITY_ORDER = [
    AnomalySeverity.CAUTION,
    AnomalySeverity.WARNING,
    AnomalySeverity.CRITICAL,
]


@dataclass
class SeverityMapper:
    """
    Maps deviation metrics to severity levels.
    """

    thresholds: DetectionConfig

    def zscore_severity(self, zscore: float) -> AnomalySeverity:
        z = abs(zscore)
        if z > self.thresholds.zscore.critical:
            return AnomalySeverity.CRITICAL
        if z > self.thresholds.zscore.warning:
            return AnomalySeverity.WARNING
        return AnomalySeverity.CAUTION

    def rate_change_severity(self, rate_change: float, threshold: float) -> AnomalySeverity:
        roc = self.thresholds.rate_of_change
        if rate_change > threshold * roc.critical_factor:
            return AnomalySeverity.CRITICAL
        if rate_change > threshold * roc.warning_factor:
            return AnomalySeverity.WARNING
        return AnomalySeverity.CAUTION

    def redline_severity(self, percent_over: float) -> AnomalySeverity:
        if percent_over > self.thresholds.redline.critical_pct:
            return AnomalySeverity.CRITICAL
        if percent_over > self.thresholds.redline.warning_pct:
            return AnomalySeverity.WARNING
        return AnomalySeverity.CAUTION

    def sustained_severity(self, deviation_sigma: float) -> AnomalySeverity:
        if deviation_sigma > self.thresholds.sustained.critical:
            return AnomalySeverity.CRITICAL
        if deviation_sigma > self.thresholds.sustained.warning:
            return AnomalySeverity.WARNING
        return AnomalySeverity.CAUTION


def overall_severity(*severities: AnomalySeverity) -> AnomalySeverity:
    """
    Return the highest severity among inputs.

    Raises:
        ValueError: If called with no severities
    """

    if not severities:
        raise ValueError("overall_severity() requires at least one severity")
    highest_index = max(SEVERITY_ORDER.index(s) for s in severities)
    return SEVERITY_ORDER[highest_index]
