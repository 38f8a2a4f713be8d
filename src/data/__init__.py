"""
Data module: telemetry record schema, working-set filtering, and read-only queries.

Records are produced by an external ingestion component. This module turns
them into the working set consumed by anomaly detection:

    Raw records (mappings or TelemetryRecord)
        ↓
    Normalization (src/data/working_set.py) → mappings
        ↓
    Working set (valid, non-negative mission time)
        ↓
    Ready for anomaly detection (src/anomaly)

Reporting queries (time slicing, downsampling, column catalog) live in
src/data/sampling.py.
"""

from src.data.sampling import (
    default_label,
    describe_columns,
    downsample,
    project,
    select_time_range,
)
from src.data.schema import TelemetryColumn, TelemetryRecord
from src.data.working_set import (
    as_mapping,
    build_working_set,
    mission_time,
    normalize_records,
    numeric_value,
)

__all__ = [
    # Schema
    "TelemetryRecord",
    "TelemetryColumn",

    # Working set
    "as_mapping",
    "build_working_set",
    "mission_time",
    "normalize_records",
    "numeric_value",

    # Queries
    "select_time_range",
    "downsample",
    "project",
    "default_label",
    "describe_columns",
]
