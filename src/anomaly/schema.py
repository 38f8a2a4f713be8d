"""
Schema definitions for telemetry anomaly detection.

All anomaly outputs are deterministic and explainable. Each anomaly references
its observed value, the sample it came from, and the figures that triggered
it. Anomalies are a tagged union on `type`, one variant per detector.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from src.core.config import RedlineLimit


class AnomalySeverity(str, Enum):
    """Severity tiers, ordered CAUTION < WARNING < CRITICAL."""

    CAUTION = "CAUTION"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class AnomalyType(str, Enum):
    """Detector that produced an anomaly."""

    Z_SCORE_OUTLIER = "Z-Score Outlier"
    RAPID_CHANGE = "Rapid Change"
    REDLINE_VIOLATION = "Redline Violation"
    SUSTAINED_DEVIATION = "Sustained Deviation"


class ViolationDirection(str, Enum):
    """Side of the redline envelope that was crossed."""

    HIGH = "HIGH"
    LOW = "LOW"


class ParameterBaseline(BaseModel):
    """
    Baseline statistics for a single parameter over the working set.

    Fields:
    - mean: population mean of finite values
    - std: population standard deviation (may be 0)
    - min / max: observed extremes
    - count: number of finite values used
    """

    mean: float
    std: float
    min: float
    max: float
    count: int = Field(ge=1)


class AnomalyBase(BaseModel):
    """
    Fields shared by every anomaly variant.

    Fields:
    - severity: categorical severity
    - parameter: record key of the parameter
    - parameter_label: display label (redline label or the key itself)
    - unit: display unit
    - value: observed value, rounded for reporting
    - mission_time: mission time of the flagged sample
    - sample_index: index of the flagged sample within the working set
    - description: one-line human readable explanation
    """

    model_config = ConfigDict(frozen=True)

    severity: AnomalySeverity
    parameter: str
    parameter_label: str
    unit: str = ""
    value: float
    mission_time: float
    sample_index: int = Field(ge=0)
    description: str


class ZScoreAnomaly(AnomalyBase):
    """Single sample far from the parameter's baseline mean."""

    type: Literal[AnomalyType.Z_SCORE_OUTLIER] = AnomalyType.Z_SCORE_OUTLIER
    expected: float
    z_score: float


class RapidChangeAnomaly(AnomalyBase):
    """Sample-to-sample jump far above the average step size."""

    type: Literal[AnomalyType.RAPID_CHANGE] = AnomalyType.RAPID_CHANGE
    previous_value: float
    rate_of_change: float
    threshold: float


class RedlineViolationAnomaly(AnomalyBase):
    """Sample outside the static safe operating envelope."""

    type: Literal[AnomalyType.REDLINE_VIOLATION] = AnomalyType.REDLINE_VIOLATION
    redline_limit: float
    exceedance: float
    direction: ViolationDirection
    percent_over: float


class SustainedDeviationAnomaly(AnomalyBase):
    """Rolling-window mean drifting persistently from baseline."""

    type: Literal[AnomalyType.SUSTAINED_DEVIATION] = AnomalyType.SUSTAINED_DEVIATION
    expected: float
    deviation_sigma: float
    window_size: int = Field(ge=1)


Anomaly = Annotated[
    Union[ZScoreAnomaly, RapidChangeAnomaly, RedlineViolationAnomaly, SustainedDeviationAnomaly],
    Field(discriminator="type"),
]


class AnomalyEvent(BaseModel):
    """
    Temporally clustered group of anomalies.

    Fields:
    - event_id: sequential identifier ("EVT-001", "EVT-002", ...)
    - start_time: mission time of the seed anomaly
    - end_time: latest mission time among members
    - severity: highest severity among members
    - anomalies: member anomalies in time order
    - affected_parameters: distinct parameter labels, first-seen order
    - anomaly_types: distinct anomaly types, first-seen order
    - count: number of members
    """

    model_config = ConfigDict(frozen=True)

    event_id: str
    start_time: float
    end_time: float
    severity: AnomalySeverity
    anomalies: List[Anomaly]
    affected_parameters: List[str]
    anomaly_types: List[AnomalyType]
    count: int = Field(ge=1)


class AnomalySummary(BaseModel):
    """
    Aggregated view of one detection run for reporting.

    Counts are over anomalies; `events` and the static tables are passed
    through unchanged.
    """

    total_anomalies: int = Field(ge=0)
    total_events: int = Field(ge=0)
    by_severity: Dict[AnomalySeverity, int]
    by_type: Dict[AnomalyType, int]
    by_parameter: Dict[str, int]
    events: List[AnomalyEvent]
    redline_limits: Dict[str, RedlineLimit]
    mission_events: Dict[str, float]


class ParameterStatistics(BaseModel):
    """
    Descriptive statistics for one numeric column.

    Quartiles are taken by index into the sorted values (floor(n * p)),
    not interpolated.
    """

    parameter: str
    count: int = Field(ge=1)
    min: float
    max: float
    mean: float
    std: float
    median: float
    q1: float
    q3: float
    iqr: float


class DetectorStatus(BaseModel):
    """Snapshot of what a detector currently holds."""

    loaded: bool
    records: int = Field(ge=0)
    anomalies: int = Field(ge=0)
    events: int = Field(ge=0)


class NoDataAvailable(BaseModel):
    """Returned instead of a result when no records have been provided."""

    reason: str = "No data available"
    detail: Optional[str] = None
