"""
Application configuration for the telemetry anomaly detector.

Provides environment-aware settings with conservative defaults. All detector
thresholds are configurable to avoid hard-coded "magic numbers". The static
redline table and mission-event markers live here as well, since they are
configuration rather than computed state.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedlineLimit(BaseModel):
	"""
	Safe operating envelope for a single parameter.

	Fields:
	- min / max: inclusive bounds; samples strictly outside are violations
	- unit: display unit (may be empty)
	- label: human readable parameter name
	"""

	min: float
	max: float
	unit: str = ""
	label: str

	@model_validator(mode="after")
	def _check_bounds(self) -> "RedlineLimit":
		if self.min > self.max:
			raise ValueError(f"redline min {self.min} exceeds max {self.max}")
		return self


class ZScoreThresholds(BaseModel):
	"""
	Thresholds for the z-score outlier detector.

	A sample is flagged when its z-score exceeds `threshold`; warning and
	critical tiers are strict "greater than" comparisons.
	"""

	threshold: float = Field(3.0, gt=0.0, description="Minimum z-score to flag")
	warning: float = Field(4.0, gt=0.0, description="WARNING above this z-score")
	critical: float = Field(5.0, gt=0.0, description="CRITICAL above this z-score")


class RateOfChangeThresholds(BaseModel):
	"""
	Thresholds for the rate-of-change detector.

	Notes:
	- multiplier: threshold = multiplier * average absolute step.
	- warning_factor / critical_factor: multiples of the threshold.
	"""

	multiplier: float = Field(5.0, gt=0.0)
	warning_factor: float = Field(2.0, gt=0.0)
	critical_factor: float = Field(3.0, gt=0.0)


class RedlineThresholds(BaseModel):
	"""Percent-over-limit tiers for redline violations."""

	warning_pct: float = Field(5.0, ge=0.0)
	critical_pct: float = Field(10.0, ge=0.0)


class SustainedDeviationThresholds(BaseModel):
	"""
	Configuration for rolling-window drift detection.

	Notes:
	- window_size: samples per window, also the dedup distance.
	- sigma: baseline standard deviations the window mean must exceed.
	- min_coverage: fraction of the window that must hold valid values.
	"""

	window_size: int = Field(20, ge=2)
	sigma: float = Field(2.0, gt=0.0)
	min_coverage: float = Field(0.8, gt=0.0, le=1.0)
	warning: float = Field(3.0, gt=0.0)
	critical: float = Field(4.0, gt=0.0)


class ClusteringConfig(BaseModel):
	"""Event clustering configuration."""

	time_window_seconds: float = Field(
		10.0,
		gt=0.0,
		description="Max distance from an event's start time for absorption",
	)


class DetectionConfig(BaseModel):
	"""
	Detection run configuration.
	"""

	zscore: ZScoreThresholds = ZScoreThresholds()
	rate_of_change: RateOfChangeThresholds = RateOfChangeThresholds()
	redline: RedlineThresholds = RedlineThresholds()
	sustained: SustainedDeviationThresholds = SustainedDeviationThresholds()
	clustering: ClusteringConfig = ClusteringConfig()

	round_decimals: int = Field(2, ge=0, description="Precision of reported values")
	time_field: str = Field("mission_time_s", min_length=1)
	phase_field: str = Field("flight_phase", min_length=1)


DEFAULT_REDLINE_LIMITS: Dict[str, RedlineLimit] = {
	"velocity_ms": RedlineLimit(min=-50, max=8200, unit="m/s", label="Velocity"),
	"altitude_km": RedlineLimit(min=-1, max=250, unit="km", label="Altitude"),
	"velocity_y_ms": RedlineLimit(min=-200, max=2000, unit="m/s", label="Vertical Velocity"),
	"velocity_x_ms": RedlineLimit(min=-50, max=8200, unit="m/s", label="Horizontal Velocity"),
	"acceleration_ms2": RedlineLimit(min=0, max=40, unit="m/s2", label="Acceleration"),
	"downrange_distance_km": RedlineLimit(min=-1, max=1500, unit="km", label="Downrange Distance"),
	"angle_deg": RedlineLimit(min=-5, max=92, unit="deg", label="Flight Angle"),
	"dynamic_pressure_pa": RedlineLimit(min=0, max=35000, unit="Pa", label="Dynamic Pressure (Q)"),
	"jerk_ms3": RedlineLimit(min=-25, max=25, unit="m/s3", label="Jerk"),
	"altitude_rate_kms": RedlineLimit(min=-0.5, max=2.5, unit="km/s", label="Altitude Rate"),
	"velocity_rate_ms2": RedlineLimit(min=-30, max=45, unit="m/s2", label="Velocity Rate"),
	"angle_rate_degs": RedlineLimit(min=-5, max=1, unit="deg/s", label="Angle Rate"),
	"mach_number": RedlineLimit(min=0, max=25, unit="", label="Mach Number"),
}

# Mission event markers, seconds after liftoff.
DEFAULT_MISSION_EVENTS: Dict[str, float] = {
	"maxq": 54,
	"throttle_down_start": 48,
	"throttle_down_end": 68,
	"meco": 145,
	"ses1": 156,
}


class Config(BaseSettings):
	"""
	Global configuration with environment overrides.
	"""

	model_config = SettingsConfigDict(env_prefix="TELEMETRY_", env_file=".env", extra="ignore")

	log_level: str = Field("INFO", description="Default logging level")
	logs_dir: Path = Field(Path("logs"), description="Directory for log files")
	detection: DetectionConfig = DetectionConfig()

	def model_post_init(self, __context: object) -> None:
		self.logs_dir.mkdir(parents=True, exist_ok=True)


config = Config()
