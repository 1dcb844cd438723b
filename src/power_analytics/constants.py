"""
Constants used throughout the Power Analytics package.

This module centralizes all magic numbers and commonly used values to improve
maintainability and clarity.
"""

from typing import Final


# === Time Constants ===
class TimeConstants:
    """Time-related constants in seconds."""

    SECONDS_PER_MINUTE: Final[int] = 60
    SECONDS_PER_HOUR: Final[int] = 3600
    SECONDS_PER_DAY: Final[int] = 86400

    # Sensor dropouts up to this many seconds are interpolated
    MAX_DROPOUT_GAP: Final[int] = 10


# === Power Curve Durations ===
class PowerCurveDurations:
    """Standard durations for power curve analysis (in seconds)."""

    DURATION_1S: Final[int] = 1
    DURATION_2S: Final[int] = 2
    DURATION_5S: Final[int] = 5
    DURATION_10S: Final[int] = 10
    DURATION_15S: Final[int] = 15
    DURATION_20S: Final[int] = 20
    DURATION_30S: Final[int] = 30
    DURATION_1MIN: Final[int] = 60
    DURATION_2MIN: Final[int] = 120
    DURATION_3MIN: Final[int] = 180
    DURATION_5MIN: Final[int] = 300
    DURATION_10MIN: Final[int] = 600
    DURATION_15MIN: Final[int] = 900
    DURATION_20MIN: Final[int] = 1200
    DURATION_30MIN: Final[int] = 1800
    DURATION_45MIN: Final[int] = 2700
    DURATION_1HR: Final[int] = 3600
    DURATION_90MIN: Final[int] = 5400
    DURATION_2HR: Final[int] = 7200

    @classmethod
    def get_standard_durations(cls) -> dict[str, int]:
        """Get all standard durations as a dictionary."""
        return {
            "1sec": cls.DURATION_1S,
            "2sec": cls.DURATION_2S,
            "5sec": cls.DURATION_5S,
            "10sec": cls.DURATION_10S,
            "15sec": cls.DURATION_15S,
            "20sec": cls.DURATION_20S,
            "30sec": cls.DURATION_30S,
            "1min": cls.DURATION_1MIN,
            "2min": cls.DURATION_2MIN,
            "3min": cls.DURATION_3MIN,
            "5min": cls.DURATION_5MIN,
            "10min": cls.DURATION_10MIN,
            "15min": cls.DURATION_15MIN,
            "20min": cls.DURATION_20MIN,
            "30min": cls.DURATION_30MIN,
            "45min": cls.DURATION_45MIN,
            "1hr": cls.DURATION_1HR,
            "90min": cls.DURATION_90MIN,
            "2hr": cls.DURATION_2HR,
        }


# === Critical Power Model ===
class CriticalPowerBand:
    """Duration band in which the hyperbolic CP model is fitted."""

    MIN_DURATION: Final[int] = 120  # 2 minutes
    MAX_DURATION: Final[int] = 1200  # 20 minutes
    MIN_SPAN: Final[int] = 480  # Fitted points must cover at least 8 minutes
    MIN_POINTS_FOR_REFIT: Final[int] = 3
    MIN_POINTS_FOR_FIT: Final[int] = 2

    # r² above which a CP-derived FTP is trusted more
    HIGH_QUALITY_R_SQUARED: Final[float] = 0.95


# === Threshold Estimation Factors ===
class ThresholdFactors:
    """Factors used for threshold estimation."""

    FTP_FROM_20MIN: Final[float] = 0.95  # FTP = 95% of 20-min max power
    SIGNIFICANT_FTP_CHANGE: Final[float] = 0.05  # 5% change triggers notification


# === Training Load Windows ===
class TrainingLoadWindows:
    """Windows for training load calculations."""

    ATL_DAYS: Final[int] = 7  # Acute Training Load (Fatigue)
    CTL_DAYS: Final[int] = 42  # Chronic Training Load (Fitness)
    MIN_HISTORY_DAYS: Final[int] = 28  # Days before ACWR is meaningful


# === Training Status Thresholds ===
class TrainingStatusThresholds:
    """Thresholds for determining training status."""

    # ACWR (Acute:Chronic Workload Ratio) thresholds
    ACWR_LOW_TRAINING: Final[float] = 0.8  # Below this = undertraining
    ACWR_OPTIMAL_MAX: Final[float] = 1.3  # Up to this = optimal
    ACWR_HIGH_RISK: Final[float] = 1.5  # Above this = high injury risk

    # TSB (Training Stress Balance) thresholds
    TSB_FRESH: Final[float] = 10.0  # Above this = fresh
    TSB_FATIGUED: Final[float] = -10.0  # Below this = fatigued


# === Intensity Zones (fractions of FTP) ===
class PowerZoneThresholds:
    """Workout intensity zone boundaries as fractions of FTP."""

    RECOVERY_MAX: Final[float] = 0.55
    ENDURANCE_MAX: Final[float] = 0.75
    TEMPO_MAX: Final[float] = 0.87
    SWEET_SPOT_MIN: Final[float] = 0.88
    SWEET_SPOT_MAX: Final[float] = 0.94
    THRESHOLD_MIN: Final[float] = 0.95
    THRESHOLD_MAX: Final[float] = 1.05
    VO2MAX_MIN: Final[float] = 1.06
    VO2MAX_MAX: Final[float] = 1.20
    ANAEROBIC_MIN: Final[float] = 1.21


# === VO2max Estimation ===
class Vo2maxConstants:
    """Coefficients for VO2max estimation (ml/kg/min)."""

    # Hawley-Noakes: VO2max = 10.8 * P5min/kg + 7
    FIVE_MIN_SLOPE: Final[float] = 10.8
    FIVE_MIN_OFFSET: Final[float] = 7.0

    FTP_SLOPE: Final[float] = 12.0
    FTP_OFFSET: Final[float] = 3.5

    CP_SLOPE: Final[float] = 12.5
    CP_OFFSET: Final[float] = 2.0

    # Fitness level upper bounds
    UNTRAINED_MAX: Final[float] = 35.0
    RECREATIONAL_MAX: Final[float] = 45.0
    TRAINED_MAX: Final[float] = 55.0
    WELL_TRAINED_MAX: Final[float] = 65.0
    ELITE_MAX: Final[float] = 75.0


# === Rider Profile ===
class RiderProfileBaselines:
    """Population-typical power:FTP ratios per duration band."""

    SHORT_DURATION: Final[int] = PowerCurveDurations.DURATION_5S
    SHORT_MIDDLE_DURATION: Final[int] = PowerCurveDurations.DURATION_1MIN
    MIDDLE_DURATION: Final[int] = PowerCurveDurations.DURATION_5MIN
    LONG_DURATION: Final[int] = PowerCurveDurations.DURATION_20MIN

    SHORT_RATIO: Final[float] = 4.0
    SHORT_MIDDLE_RATIO: Final[float] = 2.0
    MIDDLE_RATIO: Final[float] = 1.20
    LONG_RATIO: Final[float] = 1.05

    # A band must beat its baseline by this much to define the rider
    MIN_EXCESS: Final[float] = 0.10
    # ... and lead the runner-up by this much, otherwise it is a tie
    TIE_MARGIN: Final[float] = 0.05


# === CSV Parsing ===
class CSVConstants:
    """Constants for CSV file parsing."""

    DEFAULT_SEPARATOR: Final[str] = ";"  # Semicolon-separated format
    DEFAULT_ENCODING: Final[str] = "utf-8"
    POWER_COLUMN: Final[str] = "watts"
    DATE_COLUMN: Final[str] = "date"
    TSS_COLUMN: Final[str] = "tss"
