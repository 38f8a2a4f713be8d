"""
Anomaly module: Statistical anomaly detection over telemetry.

Implements deterministic baselines, detectors, severity mapping, event
clustering, and summaries.
"""

from .baselines import StatisticsAggregator, describe_numeric_columns, describe_parameter
from .clustering import EventClusterer
from .detectors import (
	RateOfChangeDetector,
	RedlineDetector,
	SustainedDeviationDetector,
	ZScoreDetector,
)
from .engine import TelemetryAnomalyDetector
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
	RapidChangeAnomaly,
	RedlineViolationAnomaly,
	SustainedDeviationAnomaly,
	ViolationDirection,
	ZScoreAnomaly,
)
from .scoring import SeverityMapper, overall_severity
from .summary import SummaryBuilder

__all__ = [
	"TelemetryAnomalyDetector",
	"Anomaly",
	"AnomalyEvent",
	"AnomalySeverity",
	"AnomalySummary",
	"AnomalyType",
	"DetectorStatus",
	"NoDataAvailable",
	"ParameterBaseline",
	"ParameterStatistics",
	"ZScoreAnomaly",
	"RapidChangeAnomaly",
	"RedlineViolationAnomaly",
	"SustainedDeviationAnomaly",
	"ViolationDirection",
	"StatisticsAggregator",
	"describe_parameter",
	"describe_numeric_columns",
	"ZScoreDetector",
	"RateOfChangeDetector",
	"RedlineDetector",
	"SustainedDeviationDetector",
	"EventClusterer",
	"SummaryBuilder",
	"SeverityMapper",
	"overall_severity",
]
