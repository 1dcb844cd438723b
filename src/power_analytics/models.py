"""
Data models for the Power Analytics package.

This module defines all the core data structures used throughout the application,
ensuring type safety and data validation using Pydantic models. Value objects
that the engine hands to collaborators are frozen: a later computation
supersedes them rather than mutating them.
"""

import datetime as dt
from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .constants import RiderProfileBaselines
from .exceptions import InvalidInputError


class PdcPoint(BaseModel):
    """A single best-known mean-maximal power for an exact duration."""

    model_config = ConfigDict(frozen=True)

    duration_secs: int = Field(..., gt=0, description="Duration in seconds")
    power_watts: int = Field(..., ge=0, description="Mean maximal power in watts")


class CpModel(BaseModel):
    """Critical power model parameters (P = CP + W'/t)."""

    model_config = ConfigDict(frozen=True)

    cp: int = Field(..., gt=0, description="Critical Power in watts")
    w_prime: int = Field(..., gt=0, description="W' (anaerobic capacity) in joules")
    r_squared: float = Field(1.0, description="Coefficient of determination of the fit")

    def power_at_duration(self, duration_secs: float) -> float:
        """
        Predict the maximal sustainable power for a duration.

        Args:
            duration_secs: Effort duration in seconds (must be positive)

        Returns:
            Predicted power in watts, CP + W'/t
        """
        if duration_secs <= 0:
            raise InvalidInputError(f"Duration must be positive, got {duration_secs}")
        return self.cp + self.w_prime / duration_secs

    def time_to_exhaustion(self, power_watts: float) -> float | None:
        """
        Predict time to exhaustion at a given power.

        Returns:
            Seconds until W' is depleted, or None when power is at or below CP
        """
        if power_watts <= self.cp:
            return None
        return self.w_prime / (power_watts - self.cp)

    def w_prime_remaining(self, power_watts: float, duration_secs: float) -> float:
        """
        Remaining W' after riding at a constant power for a duration.

        Negative values mean W' would be exhausted before the duration ends.
        """
        if power_watts <= self.cp:
            return float(self.w_prime)
        return self.w_prime - (power_watts - self.cp) * duration_secs

    def predict(self, durations: np.ndarray | list[float]) -> np.ndarray:
        """
        Evaluate the model over an array of durations.

        Args:
            durations: Sequence or numpy array of durations in seconds

        Returns:
            numpy array of predicted powers
        """
        t = np.asarray(durations, dtype=float)
        if (t <= 0).any():
            raise InvalidInputError("Durations must be positive")
        return self.cp + self.w_prime / t

    def anaerobic_energy_index(self, weight_kg: float) -> float:
        """Anaerobic Energy Index (W' per kilogram of body mass)."""
        if weight_kg <= 0:
            raise InvalidInputError(f"Body mass must be positive, got {weight_kg}")
        return self.w_prime / weight_kg


class DailyLoad(BaseModel):
    """Training load snapshot for one calendar day."""

    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(..., description="Calendar day of the snapshot")
    tss: float = Field(0.0, ge=0, description="Total TSS for the day")
    atl: float = Field(0.0, description="Acute Training Load (fatigue)")
    ctl: float = Field(0.0, description="Chronic Training Load (fitness)")
    tsb: float = Field(0.0, description="Training Stress Balance (CTL - ATL)")


class AcwrStatus(str, Enum):
    """Acute:Chronic Workload Ratio bands."""

    UNDERTRAINED = "Undertrained"
    OPTIMAL = "Optimal"
    CAUTION = "Caution"
    HIGH_RISK = "HighRisk"


_ACWR_RECOMMENDATIONS = {
    AcwrStatus.UNDERTRAINED: (
        "Training load is low. Consider increasing training volume gradually."
    ),
    AcwrStatus.OPTIMAL: "Training load is in the optimal zone. Keep up the good work!",
    AcwrStatus.CAUTION: (
        "Training load is elevated. Monitor for signs of fatigue and consider recovery."
    ),
    AcwrStatus.HIGH_RISK: (
        "Training load spike detected. High injury risk. Reduce training intensity."
    ),
}


class AcwrResult(BaseModel):
    """Acute:Chronic Workload Ratio and its classification."""

    model_config = ConfigDict(frozen=True)

    ratio: float = Field(..., ge=0, description="ATL / CTL")
    status: AcwrStatus = Field(..., description="Injury-risk band")

    @property
    def recommendation(self) -> str:
        """Short coaching advice for the current band."""
        return _ACWR_RECOMMENDATIONS[self.status]


class FitnessLevel(str, Enum):
    """Fitness classification based on VO2max."""

    UNTRAINED = "Untrained"
    RECREATIONAL = "Recreational"
    TRAINED = "Trained"
    WELL_TRAINED = "WellTrained"
    ELITE = "Elite"
    WORLD_CLASS = "WorldClass"

    @property
    def description(self) -> str:
        """Get descriptive text for the fitness level."""
        return {
            FitnessLevel.UNTRAINED: "Untrained - start with easy endurance rides",
            FitnessLevel.RECREATIONAL: "Recreational - good base fitness for cycling",
            FitnessLevel.TRAINED: "Trained - solid aerobic capacity",
            FitnessLevel.WELL_TRAINED: "Well-trained - competitive amateur level",
            FitnessLevel.ELITE: "Elite - professional or high-level amateur",
            FitnessLevel.WORLD_CLASS: "World-class - top-tier athletic capacity",
        }[self]


class Vo2maxMethod(str, Enum):
    """Input used for a VO2max estimate."""

    FIVE_MINUTE_POWER = "FiveMinutePower"
    FTP_BASED = "FtpBased"
    CRITICAL_POWER_BASED = "CriticalPowerBased"


class Vo2maxResult(BaseModel):
    """Estimated VO2max."""

    model_config = ConfigDict(frozen=True)

    vo2max: float = Field(..., gt=0, description="Estimated VO2max in ml/kg/min")
    classification: FitnessLevel = Field(..., description="Fitness level")
    method: Vo2maxMethod = Field(..., description="Estimation method used")


class FtpMethod(str, Enum):
    """Source of an FTP estimate."""

    TWENTY_MINUTE = "TwentyMinute"
    CRITICAL_POWER = "CriticalPower"


class FtpConfidence(str, Enum):
    """Confidence in an FTP estimate."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class FtpEstimate(BaseModel):
    """FTP estimate with provenance."""

    model_config = ConfigDict(frozen=True)

    ftp_watts: int = Field(..., gt=0, description="Estimated FTP in watts")
    method: FtpMethod = Field(..., description="Detection method used")
    confidence: FtpConfidence = Field(..., description="Confidence level")
    supporting_data: list[tuple[int, int]] = Field(
        default_factory=list,
        description="(duration_secs, power_watts) pairs the estimate is based on",
    )


class RiderType(str, Enum):
    """Rider type classification from the power profile."""

    SPRINTER = "Sprinter"
    PURSUITER = "Pursuiter"
    CLIMBER = "Climber"
    TIME_TRIALIST = "TimeTrialist"
    ALL_ROUNDER = "AllRounder"
    UNKNOWN = "Unknown"

    @property
    def description(self) -> str:
        """Get a brief description of this rider type."""
        return {
            RiderType.SPRINTER: "Explosive power specialist with excellent short bursts",
            RiderType.PURSUITER: "Strong anaerobic capacity, excels at 1-minute efforts",
            RiderType.CLIMBER: "High aerobic ceiling, excels at 3-8 minute efforts",
            RiderType.TIME_TRIALIST: "Outstanding sustained power for long steady efforts",
            RiderType.ALL_ROUNDER: "Balanced power profile across all durations",
            RiderType.UNKNOWN: "Insufficient data for classification",
        }[self]

    @property
    def training_focus(self) -> str:
        """Get the suggested training focus for this rider type."""
        return {
            RiderType.SPRINTER: "Threshold & VO2max intervals to build sustained power",
            RiderType.PURSUITER: "Sweet spot & FTP work to extend endurance",
            RiderType.CLIMBER: "Sprint work and long tempo to round out the profile",
            RiderType.TIME_TRIALIST: "Sprint & VO2max sessions for race versatility",
            RiderType.ALL_ROUNDER: "Target-specific training based on event demands",
            RiderType.UNKNOWN: "Record more varied efforts to build profile",
        }[self]

    @property
    def suited_events(self) -> str:
        """Get typical race types suited for this rider."""
        return {
            RiderType.SPRINTER: "Criteriums, flat road races, track sprint events",
            RiderType.PURSUITER: "Track pursuit, short time trials, uphill finishes",
            RiderType.CLIMBER: "Hilly road races, hill climbs, punchy finales",
            RiderType.TIME_TRIALIST: "Time trials, long climbs, breakaways",
            RiderType.ALL_ROUNDER: "Stage races, hilly road races, multi-discipline events",
            RiderType.UNKNOWN: "Complete more rides to determine suited events",
        }[self]


class PowerProfile(BaseModel):
    """Rider power profile: PDC points normalised by FTP."""

    model_config = ConfigDict(frozen=True)

    short_ratio: float | None = Field(None, description="5 s power / FTP")
    short_middle_ratio: float | None = Field(None, description="1 min power / FTP")
    middle_ratio: float | None = Field(None, description="5 min power / FTP")
    long_ratio: float | None = Field(None, description="20 min power / FTP")

    @property
    def is_complete(self) -> bool:
        """Whether every duration band has a ratio."""
        return None not in self.ratios.values()

    @property
    def ratios(self) -> dict[str, float | None]:
        """Ratios keyed by area name."""
        return {
            "Neuromuscular (5s)": self.short_ratio,
            "Anaerobic (1min)": self.short_middle_ratio,
            "VO2max (5min)": self.middle_ratio,
            "Threshold (20min)": self.long_ratio,
        }

    def scores(self) -> dict[str, float]:
        """Ratio relative to the population baseline, minus one, per known area."""
        baselines = (
            RiderProfileBaselines.SHORT_RATIO,
            RiderProfileBaselines.SHORT_MIDDLE_RATIO,
            RiderProfileBaselines.MIDDLE_RATIO,
            RiderProfileBaselines.LONG_RATIO,
        )
        return {
            area: ratio / baseline - 1.0
            for (area, ratio), baseline in zip(
                self.ratios.items(), baselines, strict=True
            )
            if ratio is not None
        }

    def strongest_area(self) -> str | None:
        """Get the strongest area relative to typical values."""
        scores = self.scores()
        return max(scores, key=scores.__getitem__) if scores else None

    def weakest_area(self) -> str | None:
        """Get the weakest area that could be improved."""
        scores = self.scores()
        return min(scores, key=scores.__getitem__) if scores else None


class IntensityZone(str, Enum):
    """Workout intensity zone."""

    RECOVERY = "Recovery"
    ENDURANCE = "Endurance"
    TEMPO = "Tempo"
    SWEET_SPOT = "SweetSpot"
    THRESHOLD = "Threshold"
    VO2MAX = "Vo2max"
    ANAEROBIC = "Anaerobic"

    @property
    def description(self) -> str:
        """Get description of the zone."""
        return {
            IntensityZone.RECOVERY: "Active recovery to promote blood flow and adaptation",
            IntensityZone.ENDURANCE: "Aerobic base building, fat metabolism, long duration",
            IntensityZone.TEMPO: "Muscular endurance, sustained power improvement",
            IntensityZone.SWEET_SPOT: "High training benefit with manageable fatigue",
            IntensityZone.THRESHOLD: "FTP improvement, lactate tolerance",
            IntensityZone.VO2MAX: "Aerobic capacity improvement, VO2max development",
            IntensityZone.ANAEROBIC: "Anaerobic capacity, short maximal efforts",
        }[self]


class WorkoutRecommendation(BaseModel):
    """Structured workout recommendation."""

    model_config = ConfigDict(frozen=True)

    zone: IntensityZone = Field(..., description="Recommended intensity zone")
    duration_min: int = Field(..., gt=0, description="Target duration in minutes")
    expected_tss: int = Field(..., ge=0, description="Expected TSS from this workout")
    rationale: str = Field(..., description="Why this workout was chosen")
    structure: str = Field(..., description="Suggested workout structure")
    target_power_low: int = Field(..., ge=0, description="Zone lower bound in watts")
    target_power_high: int | None = Field(
        None, description="Zone upper bound in watts (None when open-ended)"
    )


class TriggerResult(BaseModel):
    """What changed in one orchestration pass."""

    model_config = ConfigDict(frozen=True)

    pdc_updated: tuple[PdcPoint, ...] = Field(
        default=(), description="PDC points improved by this ride"
    )
    new_cp_model: CpModel | None = Field(None, description="Refitted CP model")
    new_daily_load: DailyLoad | None = Field(None, description="Advanced daily load")
    new_vo2max: Vo2maxResult | None = Field(None, description="Recomputed VO2max")

    @property
    def cp_recalculated(self) -> bool:
        """Whether the CP model was refitted."""
        return self.new_cp_model is not None

    @property
    def training_load_updated(self) -> bool:
        """Whether training load was advanced."""
        return self.new_daily_load is not None

    @property
    def vo2max_recalculated(self) -> bool:
        """Whether VO2max was recomputed."""
        return self.new_vo2max is not None

    @property
    def has_changes(self) -> bool:
        """Whether anything at all changed."""
        return bool(self.pdc_updated) or any(
            (self.cp_recalculated, self.training_load_updated, self.vo2max_recalculated)
        )
