"""
Logging configuration for production use.

Provides structured logging with file and console output. Log levels come
from config; the active detection thresholds are logged once when a logger
is first configured, so every log file records what a run was tuned with.
"""

import logging
import logging.handlers

from .config import DetectionConfig, config


def describe_detection(detection: DetectionConfig) -> str:
    """One-line summary of the active detection thresholds."""
    return (
        f"z-score >{detection.zscore.threshold} "
        f"(warn >{detection.zscore.warning}, crit >{detection.zscore.critical}); "
        f"rate x{detection.rate_of_change.multiplier} avg step; "
        f"redline warn >{detection.redline.warning_pct}%, crit >{detection.redline.critical_pct}%; "
        f"sustained {detection.sustained.window_size} samples >{detection.sustained.sigma} sigma; "
        f"clustering <{detection.clustering.time_window_seconds}s"
    )


def setup_logging(
    logger_name: str = "src",
    log_filename: str = "telemetry_anomaly.log",
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Module loggers created with ``logging.getLogger(__name__)`` inside the
    ``src`` package propagate to the default logger configured here.

    Args:
        logger_name: Name of the logger to configure
        log_filename: File name inside ``config.logs_dir``

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Don't add handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel(config.log_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = config.logs_dir / log_filename
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logger.info(f"Logging to {log_file}; detection: {describe_detection(config.detection)}")

    return logger


# Package root logger
logger = setup_logging()
