"""
Custom exceptions for the telemetry anomaly detector.

These exceptions provide clear error semantics across the system.
Malformed numeric values never raise; they are filtered out of the working
set. Exceptions are reserved for structural problems with inputs and
configuration.
"""


class AnomalyDetectionError(Exception):
    """Base exception for anomaly detection failures."""
    pass


class DataValidationError(AnomalyDetectionError):
    """Raised when a telemetry record is not a mapping or record model."""
    pass


class ConfigurationError(AnomalyDetectionError):
    """Raised when a redline or mission-event table is invalid."""
    pass
