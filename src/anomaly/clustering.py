"""
Event clustering.

Groups the merged anomaly list into temporally bounded events with a
severity rollup, returning stable, machine-consumable event objects.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from src.core.config import ClusteringConfig

from .schema import Anomaly, AnomalyEvent, AnomalyType
from .scoring import overall_severity


class EventClusterer:
    """
    Deterministic greedy clusterer.

    Grouping rules:
    - Anomalies are taken in ascending mission time (stable sort, so equal
      times keep detector order).
    - Each unclaimed anomaly seeds a new event.
    - Every later unclaimed anomaly within `time_window_seconds` of the
      seed's time joins it. Distance is measured from the event start, not
      the latest member, so an event cannot drift.
    """

    def __init__(self, config: Optional[ClusteringConfig] = None) -> None:
        self.config = config or ClusteringConfig()

    def cluster(self, anomalies: Iterable[Anomaly]) -> List[AnomalyEvent]:
        """
        Build events from anomalies.

        Args:
            anomalies: Anomalies from any detectors, in any order.

        Returns:
            Events in creation order with ids EVT-001, EVT-002, ...
        """
        ordered = sorted(anomalies, key=lambda a: a.mission_time)
        window = self.config.time_window_seconds

        events: List[AnomalyEvent] = []
        claimed = [False] * len(ordered)

        for i, seed in enumerate(ordered):
            if claimed[i]:
                continue
            claimed[i] = True
            members = [seed]

            for j in range(i + 1, len(ordered)):
                if claimed[j]:
                    continue
                if abs(ordered[j].mission_time - seed.mission_time) < window:
                    members.append(ordered[j])
                    claimed[j] = True

            events.append(self._build_event(len(events) + 1, members))

        return events

    def _build_event(self, number: int, members: Sequence[Anomaly]) -> AnomalyEvent:
        return AnomalyEvent(
            event_id=f"EVT-{number:03d}",
            start_time=members[0].mission_time,
            end_time=max(a.mission_time for a in members),
            severity=overall_severity(*(a.severity for a in members)),
            anomalies=list(members),
            affected_parameters=_unique(a.parameter_label for a in members),
            anomaly_types=_unique(a.type for a in members),
            count=len(members),
        )


def _unique(items: Iterable) -> List:
    seen = {}
    for item in items:
        seen.setdefault(item, None)
    return list(seen)
