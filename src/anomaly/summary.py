"""
Summary aggregation for reporting.

Pure counting over an anomaly list; no detection logic lives here.
"""

from __future__ import annotations

from typing import Dict, Mapping, Sequence

from src.core.config import RedlineLimit

from .schema import Anomaly, AnomalyEvent, AnomalySeverity, AnomalySummary, AnomalyType


class SummaryBuilder:
    """
    Builds an AnomalySummary from one run's anomalies and events.

    The static tables are passed through as given.
    """

    def __init__(
        self,
        redline_limits: Mapping[str, RedlineLimit],
        mission_events: Mapping[str, float],
    ) -> None:
        self.redline_limits = dict(redline_limits)
        self.mission_events = dict(mission_events)

    def build(
        self,
        anomalies: Sequence[Anomaly],
        events: Sequence[AnomalyEvent],
    ) -> AnomalySummary:
        by_severity: Dict[AnomalySeverity, int] = {s: 0 for s in AnomalySeverity}
        by_type: Dict[AnomalyType, int] = {}
        by_parameter: Dict[str, int] = {}

        for anomaly in anomalies:
            by_severity[anomaly.severity] += 1
            by_type[anomaly.type] = by_type.get(anomaly.type, 0) + 1
            by_parameter[anomaly.parameter_label] = by_parameter.get(anomaly.parameter_label, 0) + 1

        return AnomalySummary(
            total_anomalies=len(anomalies),
            total_events=len(events),
            by_severity=by_severity,
            by_type=by_type,
            by_parameter=by_parameter,
            events=list(events),
            redline_limits=self.redline_limits,
            mission_events=self.mission_events,
        )
