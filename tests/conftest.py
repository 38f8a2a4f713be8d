"""
Pytest configuration and shared fixtures.

Provides detection configuration, redline tables, and synthetic launch
telemetry for unit and integration tests.
"""

import math
from typing import Any, Dict, List, Optional, Sequence

import pytest

from src.core.config import DetectionConfig, RedlineLimit


def make_series(
    parameter: str,
    values: Sequence[Optional[float]],
    start: float = 0.0,
    step: float = 1.0,
) -> List[Dict[str, Any]]:
    """Build one record per value, sampled at a fixed interval."""
    return [
        {"mission_time_s": start + i * step, parameter: value}
        for i, value in enumerate(values)
    ]


@pytest.fixture
def series():
    """Fixture exposing make_series to tests."""
    return make_series


@pytest.fixture
def detection_config() -> DetectionConfig:
    """
    Fixture providing detection configuration with default thresholds.

    Constructed explicitly so tests don't depend on TELEMETRY_* environment
    overrides.
    """
    return DetectionConfig()


@pytest.fixture
def pressure_redline() -> Dict[str, RedlineLimit]:
    """Single-parameter redline table used by detector tests."""
    return {
        "chamber_pressure_psi": RedlineLimit(min=1350, max=1500, unit="psi", label="Chamber Pressure"),
    }


@pytest.fixture
def launch_telemetry() -> List[Dict[str, Any]]:
    """
    Fixture providing 200 s of 1 Hz ascent telemetry.

    Embedded faults:
    - dynamic pressure held at 39000 Pa (above the 35000 Pa redline) at t=54..56
    - three records with unusable mission times (negative, missing, text)

    Returns:
        List of record dicts keyed like the default redline table
    """
    records: List[Dict[str, Any]] = []
    for i in range(200):
        t = float(i)
        velocity = 40.0 * t
        q = 30000.0 * math.exp(-(((t - 54.0) / 20.0) ** 2))
        if 54 <= i <= 56:
            q = 39000.0
        records.append({
            "mission_time_s": t,
            "flight_phase": "ascent" if t < 145 else "coast",
            "velocity_ms": velocity,
            "altitude_km": 0.5 * t,
            "dynamic_pressure_pa": q,
            "mach_number": velocity / 340.0,
        })

    records.append({"mission_time_s": -1.0, "velocity_ms": 99999.0})
    records.append({"velocity_ms": 99999.0})
    records.append({"mission_time_s": "n/a", "velocity_ms": 99999.0})
    return records


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (deferred CI)"
    )
