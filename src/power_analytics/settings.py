"""Application settings and configuration management."""

from pathlib import Path

import yaml
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    CriticalPowerBand,
    PowerCurveDurations,
    ThresholdFactors,
    TimeConstants,
    TrainingLoadWindows,
)
from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings for Power Analytics.

    Settings are loaded in the following order of precedence (highest to lowest):
    1. Values passed explicitly (e.g. from a YAML config file)
    2. Environment variables (e.g., POWER_ANALYTICS_FTP)
    3. .env file (if found)
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="POWER_ANALYTICS_", env_file=".env", extra="ignore"
    )

    # --- Power Curve Intervals (in seconds) ---
    power_curve_intervals: dict[str, int] = PowerCurveDurations.get_standard_durations()

    # Zero-power runs up to this length are sensor dropouts, not coasting
    max_dropout_gap_secs: int = TimeConstants.MAX_DROPOUT_GAP

    # --- Critical Power Fit Band ---
    cp_min_duration: int = CriticalPowerBand.MIN_DURATION
    cp_max_duration: int = CriticalPowerBand.MAX_DURATION
    cp_min_span_secs: int = CriticalPowerBand.MIN_SPAN
    cp_min_points: int = CriticalPowerBand.MIN_POINTS_FOR_REFIT

    # --- Longitudinal Metrics Configuration ---
    atl_days: int = TrainingLoadWindows.ATL_DAYS
    ctl_days: int = TrainingLoadWindows.CTL_DAYS

    # --- FTP Estimation Configuration ---
    ftp_estimation_factor: float = ThresholdFactors.FTP_FROM_20MIN
    ftp_significant_change: float = ThresholdFactors.SIGNIFICANT_FTP_CHANGE

    # --- Rider ---
    rider_weight_kg: float = 75.0
    ftp: float = 250  # Default FTP in watts, should be overridden by user

    @field_validator("power_curve_intervals")
    @classmethod
    def validate_intervals(cls, v: dict[str, int]) -> dict[str, int]:
        """Ensure every power curve interval is a positive duration."""
        if not v:
            raise ValueError("power_curve_intervals must not be empty")
        if any(seconds <= 0 for seconds in v.values()):
            raise ValueError("power_curve_intervals must all be positive")
        return v

    @field_validator("max_dropout_gap_secs")
    @classmethod
    def validate_dropout_gap(cls, v: int) -> int:
        """Gap length cannot be negative."""
        if v < 0:
            raise ValueError("max_dropout_gap_secs must be >= 0")
        return v

    @field_validator("atl_days", "ctl_days", "cp_min_duration", "cp_min_points")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Windows and band limits must be positive."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("rider_weight_kg", "ftp")
    @classmethod
    def validate_positive_physiology(cls, v: float) -> float:
        """Body mass and FTP must be positive."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("ftp_estimation_factor", "ftp_significant_change")
    @classmethod
    def validate_fraction(cls, v: float) -> float:
        """Factors are fractions in (0, 1]."""
        if not 0 < v <= 1:
            raise ValueError("value must be in (0, 1]")
        return v

    @model_validator(mode="after")
    def validate_consistency(self) -> "Settings":
        """Reject inconsistent bands and windows."""
        if self.cp_max_duration <= self.cp_min_duration:
            raise ValueError("cp_max_duration must be greater than cp_min_duration")
        if self.cp_min_span_secs > self.cp_max_duration - self.cp_min_duration:
            raise ValueError("cp_min_span_secs does not fit inside the CP band")
        if self.cp_min_points < CriticalPowerBand.MIN_POINTS_FOR_FIT:
            raise ValueError(
                f"cp_min_points must be at least {CriticalPowerBand.MIN_POINTS_FOR_FIT}"
            )
        if self.ctl_days <= self.atl_days:
            raise ValueError("ctl_days must be greater than atl_days")
        return self

    @property
    def durations(self) -> list[int]:
        """Power curve intervals as a sorted list of distinct seconds."""
        return sorted(set(self.power_curve_intervals.values()))


def load_settings(config_file: Path | None = None) -> Settings:
    """Load settings from a YAML file, environment variables, and defaults."""
    if config_file:
        try:
            with open(config_file, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to read config file {config_file}: {e}"
            ) from e

        if not isinstance(yaml_settings, dict):
            raise ConfigurationError(
                f"Config file {config_file} must contain a mapping"
            )

        # Create a Settings object from YAML, then merge with env vars/defaults
        return Settings(**yaml_settings)

    return Settings()
