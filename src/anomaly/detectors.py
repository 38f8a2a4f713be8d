"""
Detectors for statistical deviations in telemetry.

Implements explainable methods:
- Z-score detection (single samples far from the baseline mean)
- Rate-of-change detection (jumps far above the average step)
- Redline detection (samples outside a static envelope)
- Sustained deviation detection (rolling-window mean drift)

Each detector scans the working set and returns a new list of anomalies.
Detectors hold configuration only; no state survives a call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple

from src.core.config import DetectionConfig, RedlineLimit
from src.data.working_set import mission_time, numeric_value

from .baselines import finite_values, mean_of
from .schema import (
    ParameterBaseline,
    RapidChangeAnomaly,
    RedlineViolationAnomaly,
    SustainedDeviationAnomaly,
    ViolationDirection,
    ZScoreAnomaly,
)
from .scoring import SeverityMapper

logger = logging.getLogger(__name__)

Records = Sequence[Mapping[str, Any]]


def _with_unit(value: float, unit: str, fmt: str = ".1f") -> str:
    return f"{value:{fmt}} {unit}".rstrip()


@dataclass
class _Detector:
    """
    Shared configuration for all detectors.

    redline_limits supplies display labels and units; parameters missing from
    it are reported under their raw key.
    """

    settings: DetectionConfig = field(default_factory=DetectionConfig)
    redline_limits: Mapping[str, RedlineLimit] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._severity_mapper = SeverityMapper(self.settings)

    def _label_unit(self, parameter: str) -> Tuple[str, str]:
        limit = self.redline_limits.get(parameter)
        if limit is None:
            return parameter, ""
        return limit.label, limit.unit

    def _round(self, value: float) -> float:
        return round(value, self.settings.round_decimals)

    def _time(self, record: Mapping[str, Any]) -> float:
        return mission_time(record, self.settings.time_field)


@dataclass
class ZScoreDetector(_Detector):
    """
    Z-score outlier detector.

    Parameters with zero standard deviation are skipped: a constant series
    has no meaningful z-score and is left to the redline detector.
    """

    def detect(
        self, working_set: Records, baselines: Mapping[str, ParameterBaseline]
    ) -> List[ZScoreAnomaly]:
        threshold = self.settings.zscore.threshold
        anomalies: List[ZScoreAnomaly] = []

        for parameter, baseline in baselines.items():
            if baseline.std == 0:
                logger.debug(f"Zero variance for {parameter}; z-score skipped")
                continue
            label, unit = self._label_unit(parameter)

            for index, record in enumerate(working_set):
                value = numeric_value(record.get(parameter))
                if value is None:
                    continue
                z = abs(value - baseline.mean) / baseline.std
                if not z > threshold:
                    continue
                anomalies.append(
                    ZScoreAnomaly(
                        severity=self._severity_mapper.zscore_severity(z),
                        parameter=parameter,
                        parameter_label=label,
                        unit=unit,
                        value=self._round(value),
                        expected=self._round(baseline.mean),
                        z_score=self._round(z),
                        mission_time=self._time(record),
                        sample_index=index,
                        description=(
                            f"{label} z-score {z:.1f} (value {_with_unit(value, unit)}, "
                            f"nominal {_with_unit(baseline.mean, unit)})"
                        ),
                    )
                )
        return anomalies


@dataclass
class RateOfChangeDetector(_Detector):
    """
    Sample-to-sample jump detector.

    The threshold is a multiple of the parameter's average absolute step
    over consecutive valid pairs. A zero threshold (flat series) skips the
    parameter.
    """

    def detect(
        self, working_set: Records, baselines: Mapping[str, ParameterBaseline]
    ) -> List[RapidChangeAnomaly]:
        multiplier = self.settings.rate_of_change.multiplier
        anomalies: List[RapidChangeAnomaly] = []

        for parameter in baselines:
            pairs = list(self._consecutive_pairs(working_set, parameter))
            if not pairs:
                continue
            average_step = sum(abs(cur - prev) for _, prev, cur in pairs) / len(pairs)
            threshold = average_step * multiplier
            if threshold == 0:
                logger.debug(f"Zero rate-of-change threshold for {parameter}; skipped")
                continue
            label, unit = self._label_unit(parameter)

            for index, previous, current in pairs:
                rate = abs(current - previous)
                if not rate > threshold:
                    continue
                trend = "increase" if current > previous else "decrease"
                anomalies.append(
                    RapidChangeAnomaly(
                        severity=self._severity_mapper.rate_change_severity(rate, threshold),
                        parameter=parameter,
                        parameter_label=label,
                        unit=unit,
                        value=self._round(current),
                        previous_value=self._round(previous),
                        rate_of_change=self._round(rate),
                        threshold=self._round(threshold),
                        mission_time=self._time(working_set[index]),
                        sample_index=index,
                        description=(
                            f"Rapid {trend} in {label}: delta {_with_unit(rate, unit)} "
                            f"per sample (avg {average_step:.2f})"
                        ),
                    )
                )
        return anomalies

    @staticmethod
    def _consecutive_pairs(
        working_set: Records, parameter: str
    ) -> Iterator[Tuple[int, float, float]]:
        """Yield (index, previous, current) where both neighbours are valid."""
        for index in range(1, len(working_set)):
            previous = numeric_value(working_set[index - 1].get(parameter))
            current = numeric_value(working_set[index].get(parameter))
            if previous is None or current is None:
                continue
            yield index, previous, current


@dataclass
class RedlineDetector(_Detector):
    """
    Static envelope detector.

    Independent of the baseline. Percent over limit is exceedance relative
    to the magnitude of the crossed limit; a limit of exactly zero is treated
    as 1 so the percentage stays finite.
    """

    def detect(self, working_set: Records) -> List[RedlineViolationAnomaly]:
        anomalies: List[RedlineViolationAnomaly] = []

        for parameter, limit in self.redline_limits.items():
            for index, record in enumerate(working_set):
                value = numeric_value(record.get(parameter))
                if value is None:
                    continue
                if value > limit.max:
                    direction = ViolationDirection.HIGH
                    limit_value = limit.max
                    exceedance = self._round(value - limit.max)
                elif value < limit.min:
                    direction = ViolationDirection.LOW
                    limit_value = limit.min
                    exceedance = self._round(limit.min - value)
                else:
                    continue

                # Near-zero limits inflate this figure.
                divisor = abs(limit_value) if limit_value != 0 else 1.0
                percent_over = exceedance * 100.0 / divisor

                anomalies.append(
                    RedlineViolationAnomaly(
                        severity=self._severity_mapper.redline_severity(percent_over),
                        parameter=parameter,
                        parameter_label=limit.label,
                        unit=limit.unit,
                        value=self._round(value),
                        redline_limit=limit_value,
                        exceedance=exceedance,
                        direction=direction,
                        percent_over=self._round(percent_over),
                        mission_time=self._time(record),
                        sample_index=index,
                        description=(
                            f"{limit.label} {direction.value} redline: {_with_unit(value, limit.unit)} "
                            f"(limit {_with_unit(limit_value, limit.unit, 'g')}, "
                            f"{percent_over:.1f}% over)"
                        ),
                    )
                )
        return anomalies


@dataclass
class SustainedDeviationDetector(_Detector):
    """
    Rolling-window drift detector.

    The window ending at index i covers the `window_size` samples before i.
    Windows with too few valid values are skipped. Once a parameter is
    flagged at index i, further flags closer than one window are dropped so
    a single excursion yields a single anomaly.
    """

    def detect(
        self, working_set: Records, baselines: Mapping[str, ParameterBaseline]
    ) -> List[SustainedDeviationAnomaly]:
        cfg = self.settings.sustained
        window = cfg.window_size
        min_valid = window * cfg.min_coverage
        anomalies: List[SustainedDeviationAnomaly] = []
        last_flagged: Dict[str, int] = {}

        for parameter, baseline in baselines.items():
            if baseline.std == 0:
                continue
            label, unit = self._label_unit(parameter)

            for index in range(window, len(working_set)):
                values = finite_values(working_set[index - window:index], parameter)
                if len(values) < min_valid:
                    continue
                window_mean = mean_of(values)
                deviation = abs(window_mean - baseline.mean) / baseline.std
                if not deviation > cfg.sigma:
                    continue

                previous = last_flagged.get(parameter)
                if previous is not None and index - previous < window:
                    continue
                last_flagged[parameter] = index

                anomalies.append(
                    SustainedDeviationAnomaly(
                        severity=self._severity_mapper.sustained_severity(deviation),
                        parameter=parameter,
                        parameter_label=label,
                        unit=unit,
                        value=self._round(window_mean),
                        expected=self._round(baseline.mean),
                        deviation_sigma=self._round(deviation),
                        window_size=window,
                        mission_time=self._time(working_set[index]),
                        sample_index=index,
                        description=(
                            f"Sustained {deviation:.1f} sigma deviation in {label} over "
                            f"{window}-sample window (mean {window_mean:.1f}, "
                            f"nominal {baseline.mean:.1f})"
                        ),
                    )
                )
        return anomalies
