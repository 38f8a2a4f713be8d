"""
Baseline estimation for telemetry parameters.

Computes per-parameter population statistics over the working set. Baselines
are recomputed on every detection run and never persisted. Also provides the
descriptive statistics (quartiles, IQR) shown in parameter reports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import floor, fsum
from statistics import pstdev
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from src.data.working_set import numeric_value

from .schema import ParameterBaseline, ParameterStatistics

logger = logging.getLogger(__name__)


def finite_values(records: Iterable[Mapping[str, Any]], parameter: str) -> List[float]:
    """Finite numeric values of a parameter, in record order."""
    values = []
    for record in records:
        value = numeric_value(record.get(parameter))
        if value is not None:
            values.append(value)
    return values


def mean_of(values: Sequence[float]) -> float:
    """Arithmetic mean that stays finite for values near the float limit."""
    n = len(values)
    return fsum(v / n for v in values)


def _mean_and_std(values: Sequence[float]) -> tuple:
    # Population deviation, not Bessel-corrected; exact for constant input.
    return mean_of(values), pstdev(values)


@dataclass
class StatisticsAggregator:
    """
    Per-parameter baseline calculator.

    Parameters with no finite values are left out of the result rather than
    raising.
    """

    def compute(
        self,
        working_set: Sequence[Mapping[str, Any]],
        parameters: Iterable[str],
    ) -> Dict[str, ParameterBaseline]:
        baselines: Dict[str, ParameterBaseline] = {}
        for parameter in parameters:
            values = finite_values(working_set, parameter)
            if not values:
                logger.debug(f"No valid samples for {parameter}; baseline skipped")
                continue
            mean, std = _mean_and_std(values)
            baselines[parameter] = ParameterBaseline(
                mean=mean,
                std=std,
                min=min(values),
                max=max(values),
                count=len(values),
            )
        return baselines


def describe_parameter(
    records: Sequence[Mapping[str, Any]],
    parameter: str,
) -> Optional[ParameterStatistics]:
    """
    Descriptive statistics for one column.

    Returns:
        ParameterStatistics, or None when the column has no finite values
    """
    values = sorted(finite_values(records, parameter))
    if not values:
        return None

    n = len(values)
    mean, std = _mean_and_std(values)
    q1 = values[floor(n * 0.25)]
    q3 = values[floor(n * 0.75)]
    return ParameterStatistics(
        parameter=parameter,
        count=n,
        min=values[0],
        max=values[-1],
        mean=round(mean, 4),
        std=round(std, 4),
        median=values[n // 2],
        q1=q1,
        q3=q3,
        iqr=q3 - q1,
    )


def numeric_columns(records: Sequence[Mapping[str, Any]], time_field: str = "mission_time_s") -> List[str]:
    """Columns holding a number in the first record, excluding the time column."""
    if not records:
        return []
    return [
        name
        for name, value in records[0].items()
        if name != time_field and numeric_value(value) is not None
    ]


def describe_numeric_columns(
    records: Sequence[Mapping[str, Any]],
    time_field: str = "mission_time_s",
) -> Dict[str, ParameterStatistics]:
    stats: Dict[str, ParameterStatistics] = {}
    for name in numeric_columns(records, time_field):
        described = describe_parameter(records, name)
        if described is not None:
            stats[name] = described
    return stats
