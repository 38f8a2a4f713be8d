"""
Telemetry record schema for the anomaly detection pipeline.

Records arrive from an ingestion component that has already coerced CSV or
stream values to numbers. The core accepts either these models or plain
mappings with the same keys; both are treated as read-only.

Design rationale:
- Only the time column and phase label are named; every other column is a
  telemetry parameter kept as an extra field.
- Values are not validated as numbers here. Non-numeric, missing, or NaN
  values are filtered out by the working set instead of failing ingestion.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TelemetryRecord(BaseModel):
    """
    A single uniformly-sampled telemetry observation.

    Attributes:
        mission_time_s: Seconds since the telemetry reference epoch
        flight_phase: Optional phase label (e.g. "ascent", "coast")

    Notes:
        - Additional keyword arguments become parameter columns
          (``TelemetryRecord(mission_time_s=1.0, altitude_km=0.4)``)
        - ``model_dump()`` yields the mapping consumed by the detectors
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    mission_time_s: Optional[Any] = Field(
        default=None,
        description="Mission elapsed time in seconds"
    )

    flight_phase: Optional[str] = Field(
        default=None,
        description="Flight phase label"
    )


class TelemetryColumn(BaseModel):
    """
    Catalog entry describing one column of a loaded dataset.

    Attributes:
        name: Column key as it appears in the records
        label: Human readable label (redline label when configured)
        unit: Display unit, empty when unknown
        is_numeric: True if the first record holds a number in this column
        has_redline: True if a static redline limit exists for the column
    """

    name: str
    label: str
    unit: str = ""
    is_numeric: bool
    has_redline: bool
