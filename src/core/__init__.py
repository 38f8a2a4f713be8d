"""
Core module: Configuration, logging, and exception handling.
"""

from .config import (
    DEFAULT_MISSION_EVENTS,
    DEFAULT_REDLINE_LIMITS,
    Config,
    DetectionConfig,
    RedlineLimit,
    config,
)
from .exceptions import (
    AnomalyDetectionError,
    ConfigurationError,
    DataValidationError,
)
from .logging_config import logger, setup_logging

__all__ = [
    "Config",
    "DetectionConfig",
    "RedlineLimit",
    "DEFAULT_REDLINE_LIMITS",
    "DEFAULT_MISSION_EVENTS",
    "config",
    "logger",
    "setup_logging",
    "AnomalyDetectionError",
    "DataValidationError",
    "ConfigurationError",
]
