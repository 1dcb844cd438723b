"""Power Analytics - a package for deriving physiological models from cycling power data."""

__version__ = "0.1.0"

from . import analysis, constants, data, exceptions, metrics, models
from .analysis import FtpEstimator, RiderProfileClassifier, WorkoutRecommender
from .data import RideDataLoader
from .metrics import (
    CriticalPowerFitter,
    MaximalPowerExtractor,
    PowerDurationCurve,
    TrainingLoadTracker,
    Vo2maxEstimator,
)
from .models import (
    AcwrResult,
    AcwrStatus,
    CpModel,
    DailyLoad,
    FitnessLevel,
    FtpEstimate,
    IntensityZone,
    PdcPoint,
    PowerProfile,
    RiderType,
    TriggerResult,
    Vo2maxResult,
    WorkoutRecommendation,
)
from .orchestrator import AnalyticsOrchestrator
from .settings import Settings, load_settings


def get_version() -> str:
    """Get the current version of power_analytics."""
    return __version__


def get_package_info() -> dict[str, str]:
    """Get package information including name and version."""
    return {
        "name": "power-analytics",
        "version": __version__,
        "description": "A package for deriving physiological models from cycling power data",
    }


__all__ = [
    # Version & Info
    "get_version",
    "get_package_info",
    # Models
    "AcwrResult",
    "AcwrStatus",
    "CpModel",
    "DailyLoad",
    "FitnessLevel",
    "FtpEstimate",
    "IntensityZone",
    "PdcPoint",
    "PowerProfile",
    "RiderType",
    "TriggerResult",
    "Vo2maxResult",
    "WorkoutRecommendation",
    # Metrics
    "CriticalPowerFitter",
    "MaximalPowerExtractor",
    "PowerDurationCurve",
    "TrainingLoadTracker",
    "Vo2maxEstimator",
    # Analysis Layer
    "FtpEstimator",
    "RiderProfileClassifier",
    "WorkoutRecommender",
    # Data Layer
    "RideDataLoader",
    # Orchestration
    "AnalyticsOrchestrator",
    # Configuration
    "Settings",
    "load_settings",
    # Modules
    "analysis",
    "constants",
    "data",
    "exceptions",
    "metrics",
    "models",
]
