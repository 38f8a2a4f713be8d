"""
Working-set construction.

Every detector runs over the same working set: the input records filtered to
those whose mission time is a valid non-negative number. Parameter values are
read through `numeric_value`, which maps anything that is not a finite number
to None so callers can skip it.
"""

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from src.core.exceptions import DataValidationError

logger = logging.getLogger(__name__)


def numeric_value(value: Any) -> Optional[float]:
    """
    Return value as a float if it is a finite number, else None.

    Booleans are rejected even though they subclass int.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


def as_mapping(record: Any) -> Mapping[str, Any]:
    """
    Normalize a record to a read-only mapping.

    Args:
        record: Mapping or pydantic model (e.g. TelemetryRecord)

    Raises:
        DataValidationError: If record is neither
    """
    if isinstance(record, Mapping):
        return record
    if isinstance(record, BaseModel):
        return record.model_dump()
    raise DataValidationError(
        f"Telemetry record must be a mapping or model, got {type(record).__name__}"
    )


def normalize_records(records: Iterable[Any]) -> List[Mapping[str, Any]]:
    """Materialize records as a list of mappings, preserving order."""
    return [as_mapping(r) for r in records]


def build_working_set(
    records: Iterable[Mapping[str, Any]],
    time_field: str = "mission_time_s",
) -> List[Mapping[str, Any]]:
    """
    Filter records to those with a valid, non-negative mission time.

    Args:
        records: Normalized records in input order
        time_field: Key holding mission time

    Returns:
        Records in their original order; indices into this list are the
        sample indices reported on anomalies.
    """
    records = list(records)
    working: List[Mapping[str, Any]] = []
    for record in records:
        t = numeric_value(record.get(time_field))
        if t is None or t < 0:
            continue
        working.append(record)

    dropped = len(records) - len(working)
    if dropped:
        logger.debug(f"Dropped {dropped} records without a valid {time_field}")
    return working


def mission_time(record: Mapping[str, Any], time_field: str = "mission_time_s") -> float:
    """Mission time of a working-set record."""
    return float(record[time_field])
