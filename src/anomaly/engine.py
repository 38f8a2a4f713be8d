"""
Telemetry anomaly detection engine.

Consumes telemetry records, estimates per-parameter baselines, runs the four
detectors, and clusters the merged anomalies into events.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from src.core.config import (
    DEFAULT_MISSION_EVENTS,
    DEFAULT_REDLINE_LIMITS,
    DetectionConfig,
    RedlineLimit,
    config,
)
from src.core.exceptions import ConfigurationError
from src.data.sampling import describe_columns, downsample, project, select_time_range
from src.data.schema import TelemetryColumn
from src.data.working_set import build_working_set, normalize_records, numeric_value

from .baselines import StatisticsAggregator, describe_numeric_columns
from .clustering import EventClusterer
from .detectors import (
    RateOfChangeDetector,
    RedlineDetector,
    SustainedDeviationDetector,
    ZScoreDetector,
)
from .schema import (
    Anomaly,
    AnomalyEvent,
    AnomalySeverity,
    AnomalySummary,
    AnomalyType,
    DetectorStatus,
    NoDataAvailable,
    ParameterBaseline,
    ParameterStatistics,
)
from .summary import SummaryBuilder

logger = logging.getLogger(__name__)

Records = Iterable[Any]


class TelemetryAnomalyDetector:
    """
    Offline anomaly detector for one telemetry dataset.

    Notes:
    - The static redline and mission-event tables are validated and copied
      at construction and never mutated.
    - Every detection run rebuilds baselines, anomalies, and events from
      empty; identical input gives content-equal output.
    - Calls made before any records were provided return NoDataAvailable
      rather than raising.
    """

    def __init__(
        self,
        records: Optional[Records] = None,
        redline_limits: Optional[Mapping[str, Any]] = None,
        mission_events: Optional[Mapping[str, Any]] = None,
        settings: Optional[DetectionConfig] = None,
    ) -> None:
        self.settings = settings or config.detection
        self.redline_limits = _validate_redlines(
            DEFAULT_REDLINE_LIMITS if redline_limits is None else redline_limits
        )
        self.mission_events = _validate_mission_events(
            DEFAULT_MISSION_EVENTS if mission_events is None else mission_events
        )

        self._aggregator = StatisticsAggregator()
        detector_args = dict(settings=self.settings, redline_limits=self.redline_limits)
        self._z_detector = ZScoreDetector(**detector_args)
        self._roc_detector = RateOfChangeDetector(**detector_args)
        self._redline_detector = RedlineDetector(**detector_args)
        self._sustained_detector = SustainedDeviationDetector(**detector_args)
        self._clusterer = EventClusterer(self.settings.clustering)
        self._summary_builder = SummaryBuilder(self.redline_limits, self.mission_events)

        self._records: Optional[List[Mapping[str, Any]]] = None
        self._baselines: Dict[str, ParameterBaseline] = {}
        self._anomalies: List[Anomaly] = []
        self._events: List[AnomalyEvent] = []

        if records is not None:
            self.load(records)

    @property
    def has_data(self) -> bool:
        return self._records is not None

    @property
    def anomalies(self) -> List[Anomaly]:
        return list(self._anomalies)

    @property
    def events(self) -> List[AnomalyEvent]:
        return list(self._events)

    @property
    def baselines(self) -> Dict[str, ParameterBaseline]:
        return dict(self._baselines)

    def load(self, records: Records) -> DetectorStatus:
        """Replace the dataset and run detection on it."""
        self.detect(records)
        return self.status()

    def detect(self, records: Optional[Records] = None) -> Union[List[Anomaly], NoDataAvailable]:
        """
        Run all detectors and clustering.

        Args:
            records: New dataset; when omitted the loaded dataset is re-run.

        Returns:
            Anomalies sorted by mission time, or NoDataAvailable if no
            dataset was ever provided.
        """
        if records is not None:
            self._records = normalize_records(records)
        if self._records is None:
            return NoDataAvailable(detail="detect() called before any records were provided")

        self._baselines = {}
        self._anomalies = []
        self._events = []

        working = build_working_set(self._records, self.settings.time_field)
        if not working:
            logger.info(f"No valid timed records among {len(self._records)}; nothing to detect")
            return []

        self._baselines = self._aggregator.compute(working, self.redline_limits)

        anomalies: List[Anomaly] = []
        anomalies.extend(self._z_detector.detect(working, self._baselines))
        anomalies.extend(self._roc_detector.detect(working, self._baselines))
        anomalies.extend(self._redline_detector.detect(working))
        anomalies.extend(self._sustained_detector.detect(working, self._baselines))

        anomalies.sort(key=lambda a: a.mission_time)
        self._anomalies = anomalies
        self._events = self._clusterer.cluster(anomalies)

        logger.info(
            f"Detected {len(self._anomalies)} anomalies in {len(self._events)} events "
            f"({len(working)}/{len(self._records)} records in working set)"
        )
        return list(self._anomalies)

    def summarize(self) -> Union[AnomalySummary, NoDataAvailable]:
        if self._records is None:
            return NoDataAvailable(detail="summarize() called before any records were provided")
        return self._summary_builder.build(self._anomalies, self._events)

    def filter_anomalies(
        self,
        severity: Optional[Union[AnomalySeverity, str]] = None,
        anomaly_type: Optional[Union[AnomalyType, str]] = None,
        parameter: Optional[str] = None,
    ) -> Union[List[Anomaly], NoDataAvailable]:
        """
        Filter the current anomalies. Criteria left as None match everything.

        Raises:
            ValueError: If severity or anomaly_type is not a known value
        """
        if self._records is None:
            return NoDataAvailable(detail="filter_anomalies() called before any records were provided")

        wanted_severity = AnomalySeverity(severity) if severity is not None else None
        wanted_type = AnomalyType(anomaly_type) if anomaly_type is not None else None

        return [
            a
            for a in self._anomalies
            if (wanted_severity is None or a.severity == wanted_severity)
            and (wanted_type is None or a.type == wanted_type)
            and (parameter is None or a.parameter == parameter)
        ]

    def status(self) -> DetectorStatus:
        return DetectorStatus(
            loaded=self._records is not None,
            records=len(self._records or []),
            anomalies=len(self._anomalies),
            events=len(self._events),
        )

    def parameter_statistics(self) -> Union[Dict[str, ParameterStatistics], NoDataAvailable]:
        """Descriptive statistics for every numeric column of the dataset."""
        if self._records is None:
            return NoDataAvailable()
        return describe_numeric_columns(self._records, self.settings.time_field)

    def columns(self) -> Union[List[TelemetryColumn], NoDataAvailable]:
        if self._records is None:
            return NoDataAvailable()
        return describe_columns(self._records, self.redline_limits)

    def telemetry(
        self,
        start_time: Optional[float] = None,
        end_time: Optional[float] = None,
        max_points: int = 1000,
        parameters: Optional[Sequence[str]] = None,
    ) -> Union[List[Mapping[str, Any]], NoDataAvailable]:
        """
        Time-sliced, downsampled view of the raw records for plotting.

        When parameters is given, rows keep only the time, phase and the
        requested columns.
        """
        if self._records is None:
            return NoDataAvailable()
        rows = select_time_range(self._records, start_time, end_time, self.settings.time_field)
        rows = downsample(rows, max_points)
        if parameters:
            return project(rows, parameters, self.settings.time_field, self.settings.phase_field)
        return rows


def _validate_redlines(table: Mapping[str, Any]) -> Dict[str, RedlineLimit]:
    limits: Dict[str, RedlineLimit] = {}
    for parameter, limit in table.items():
        try:
            limits[parameter] = RedlineLimit.model_validate(limit)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid redline limit for {parameter}: {exc}") from exc
    return limits


def _validate_mission_events(table: Mapping[str, Any]) -> Dict[str, float]:
    events: Dict[str, float] = {}
    for name, seconds in table.items():
        value = numeric_value(seconds)
        if value is None:
            raise ConfigurationError(f"Mission event {name} must have a numeric time, got {seconds!r}")
        events[name] = value
    return events
