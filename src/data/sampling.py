"""
Read-only telemetry queries for reporting layers.

Time-range selection, downsampling and column projection over an already
loaded record list, plus a catalog of the columns present in a dataset.
None of these functions copy or mutate the records they are given beyond
building projected dictionaries.
"""

import math
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from src.core.config import RedlineLimit
from src.data.schema import TelemetryColumn
from src.data.working_set import numeric_value


def select_time_range(
    records: Iterable[Mapping[str, Any]],
    start_time: Optional[float] = None,
    end_time: Optional[float] = None,
    time_field: str = "mission_time_s",
) -> List[Mapping[str, Any]]:
    """
    Keep records whose mission time lies within [start_time, end_time].

    Either bound may be None to leave that side open. Records without a
    numeric time are dropped once any bound is given.
    """
    records = list(records)
    if start_time is None and end_time is None:
        return records

    selected = []
    for record in records:
        t = numeric_value(record.get(time_field))
        if t is None:
            continue
        if start_time is not None and t < start_time:
            continue
        if end_time is not None and t > end_time:
            continue
        selected.append(record)
    return selected


def downsample(records: Sequence[Mapping[str, Any]], max_points: int = 1000) -> List[Mapping[str, Any]]:
    """
    Reduce records to roughly max_points by keeping every n-th record.

    Example: 2500 records with max_points=1000 keeps indices 0, 3, 6, ...

    Raises:
        ValueError: If max_points is not positive
    """
    if max_points <= 0:
        raise ValueError("max_points must be positive")
    if len(records) <= max_points:
        return list(records)
    step = math.ceil(len(records) / max_points)
    return [r for i, r in enumerate(records) if i % step == 0]


def project(
    records: Iterable[Mapping[str, Any]],
    parameters: Sequence[str],
    time_field: str = "mission_time_s",
    phase_field: str = "flight_phase",
) -> List[Dict[str, Any]]:
    """Restrict each record to the time, phase and requested parameter columns."""
    projected = []
    for record in records:
        row = {time_field: record.get(time_field), phase_field: record.get(phase_field)}
        for name in parameters:
            if name in record:
                row[name] = record[name]
        projected.append(row)
    return projected


def default_label(name: str) -> str:
    """
    Derive a display label from a column key.

    "dynamic_pressure_pa" -> "Dynamic Pressure Pa"
    """
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), name.replace("_", " "))


def describe_columns(
    records: Sequence[Mapping[str, Any]],
    redline_limits: Mapping[str, RedlineLimit],
) -> List[TelemetryColumn]:
    """
    Catalog the columns of a dataset, using the first record as reference.

    Returns:
        One TelemetryColumn per key of the first record, in key order;
        empty list for an empty dataset.
    """
    if not records:
        return []

    first = records[0]
    columns = []
    for name, value in first.items():
        limit = redline_limits.get(name)
        columns.append(
            TelemetryColumn(
                name=name,
                label=limit.label if limit else default_label(name),
                unit=limit.unit if limit else "",
                is_numeric=numeric_value(value) is not None,
                has_redline=limit is not None,
            )
        )
    return columns
