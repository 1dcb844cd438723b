"""
Metrics calculation modules.

This package contains the model-building logic, organized by type:
- power_curve: Mean-maximal power extraction and the power-duration curve
- critical_power: Critical power (CP/W') modeling
- training_load: ATL/CTL/TSB tracking and ACWR classification
- vo2max: VO2max estimation from power
"""

from .base import BaseAnalyticsComponent
from .critical_power import CriticalPowerFitter, hyperbolic_model
from .power_curve import (
    MaximalPowerExtractor,
    PowerDurationCurve,
    build_curve,
    interpolate_sensor_gaps,
    interval_name_from_seconds,
)
from .training_load import TrainingLoadTracker, classify_acwr
from .vo2max import Vo2maxEstimator, classify_fitness

__all__ = [
    "BaseAnalyticsComponent",
    "CriticalPowerFitter",
    "MaximalPowerExtractor",
    "PowerDurationCurve",
    "TrainingLoadTracker",
    "Vo2maxEstimator",
    "build_curve",
    "classify_acwr",
    "classify_fitness",
    "hyperbolic_model",
    "interpolate_sensor_gaps",
    "interval_name_from_seconds",
]
