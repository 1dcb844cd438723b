"""
Workout recommendation.

Chooses the next workout from the rider's training status: the ACWR band
decides how much load the rider can absorb, and within the optimal band the
training stress balance decides how hard the session should be.
"""

import logging

from ..constants import PowerZoneThresholds, TrainingStatusThresholds
from ..exceptions import InvalidInputError
from ..metrics.base import BaseAnalyticsComponent
from ..metrics.training_load import TrainingLoadTracker
from ..models import AcwrStatus, DailyLoad, IntensityZone, WorkoutRecommendation
from ..settings import Settings

logger = logging.getLogger(__name__)

# Zone bounds as (low, high) fractions of FTP; None means open-ended
ZONE_FRACTIONS: dict[IntensityZone, tuple[float, float | None]] = {
    IntensityZone.RECOVERY: (0.0, PowerZoneThresholds.RECOVERY_MAX),
    IntensityZone.ENDURANCE: (
        PowerZoneThresholds.RECOVERY_MAX,
        PowerZoneThresholds.ENDURANCE_MAX,
    ),
    IntensityZone.TEMPO: (PowerZoneThresholds.ENDURANCE_MAX, PowerZoneThresholds.TEMPO_MAX),
    IntensityZone.SWEET_SPOT: (
        PowerZoneThresholds.SWEET_SPOT_MIN,
        PowerZoneThresholds.SWEET_SPOT_MAX,
    ),
    IntensityZone.THRESHOLD: (
        PowerZoneThresholds.THRESHOLD_MIN,
        PowerZoneThresholds.THRESHOLD_MAX,
    ),
    IntensityZone.VO2MAX: (PowerZoneThresholds.VO2MAX_MIN, PowerZoneThresholds.VO2MAX_MAX),
    IntensityZone.ANAEROBIC: (PowerZoneThresholds.ANAEROBIC_MIN, None),
}


def zone_ftp_range(zone: IntensityZone) -> str:
    """Zone bounds as a human-readable percentage of FTP."""
    low, high = ZONE_FRACTIONS[zone]
    if low == 0:
        return f"< {round(high * 100)}%"
    if high is None:
        return f"> {round(low * 100) - 1}%"
    return f"{round(low * 100)}-{round(high * 100)}%"


class WorkoutRecommender(BaseAnalyticsComponent):
    """
    Recommends a structured workout for the rider's current training status.

    All target powers are fractions of the rider's FTP.
    """

    def __init__(self, ftp: float, settings: Settings | None = None):
        """
        Initialize the recommender.

        Args:
            ftp: Functional Threshold Power in watts
            settings: Application settings

        Raises:
            InvalidInputError: If FTP is not positive
        """
        super().__init__(settings)
        if ftp <= 0:
            raise InvalidInputError(f"FTP must be positive, got {ftp}")
        self.ftp = float(ftp)
        self.load_tracker = TrainingLoadTracker(self.settings)

    def recommend(self, daily_load: DailyLoad) -> WorkoutRecommendation:
        """
        Get a workout recommendation for the current training status.

        Args:
            daily_load: The rider's latest daily load

        Returns:
            WorkoutRecommendation
        """
        status = self.load_tracker.acwr(daily_load.atl, daily_load.ctl).status

        if status == AcwrStatus.UNDERTRAINED:
            recommendation = self._build()
        elif status == AcwrStatus.OPTIMAL:
            recommendation = self._maintain(daily_load.tsb)
        elif status == AcwrStatus.CAUTION:
            recommendation = self._moderate()
        else:
            recommendation = self._recover()

        self.logger.debug(
            f"ACWR {status.value}, TSB {daily_load.tsb:.1f} -> "
            f"{recommendation.zone.value} workout"
        )
        return recommendation

    def zone_power_range(self, zone: IntensityZone) -> tuple[int, int | None]:
        """
        Power bounds for a zone in watts.

        Returns:
            (low, high) rounded watts; high is None for the open-ended
            anaerobic zone
        """
        low, high = ZONE_FRACTIONS[zone]
        return (
            self._watts(low),
            None if high is None else self._watts(high),
        )

    def _watts(self, fraction: float) -> int:
        return round(self.ftp * fraction)

    def _make(
        self,
        zone: IntensityZone,
        duration_min: int,
        expected_tss: int,
        rationale: str,
        structure: str,
    ) -> WorkoutRecommendation:
        low, high = self.zone_power_range(zone)
        return WorkoutRecommendation(
            zone=zone,
            duration_min=duration_min,
            expected_tss=expected_tss,
            rationale=rationale,
            structure=structure,
            target_power_low=low,
            target_power_high=high,
        )

    def _build(self) -> WorkoutRecommendation:
        """Undertrained: build load with sweet spot work."""
        return self._make(
            IntensityZone.SWEET_SPOT,
            60,
            70,
            "Training load is low. Sweet spot intervals build fitness "
            "efficiently without excessive fatigue.",
            f"Warm-up 10min, 2x20min @ {self._watts(0.91)}W "
            f"({zone_ftp_range(IntensityZone.SWEET_SPOT)} FTP) with 5min recovery, "
            "Cool-down 10min",
        )

    def _maintain(self, tsb: float) -> WorkoutRecommendation:
        """Optimal load: intensity follows the training stress balance."""
        if tsb > TrainingStatusThresholds.TSB_FRESH:
            return self._make(
                IntensityZone.THRESHOLD,
                75,
                90,
                "You're fresh with good fitness. Good day for a quality session.",
                f"Warm-up 15min, 3x10min @ {self._watts(1.0)}W (FTP) "
                "with 5min recovery, Cool-down 10min",
            )
        if tsb >= TrainingStatusThresholds.TSB_FATIGUED:
            return self._make(
                IntensityZone.SWEET_SPOT,
                90,
                85,
                "Training load is optimal. Keep building with sweet spot work.",
                f"Warm-up 10min, 3x20min @ {self._watts(0.91)}W "
                f"({zone_ftp_range(IntensityZone.SWEET_SPOT)} FTP) with 5min recovery, "
                "Cool-down 10min",
            )
        return self._make(
            IntensityZone.TEMPO,
            90,
            65,
            "Some fatigue has built up. Tempo holds fitness while you absorb it.",
            f"Warm-up 15min, 60min @ {self._watts(0.80)}W "
            f"({zone_ftp_range(IntensityZone.TEMPO)} FTP), Cool-down 15min",
        )

    def _moderate(self) -> WorkoutRecommendation:
        """Caution band: back off to endurance riding."""
        return self._make(
            IntensityZone.ENDURANCE,
            60,
            45,
            "Training load is elevated. An easy endurance ride keeps fitness "
            "while you recover.",
            f"Steady riding @ {self._watts(0.65)}W "
            f"({zone_ftp_range(IntensityZone.ENDURANCE)} FTP) for 60min",
        )

    def _recover(self) -> WorkoutRecommendation:
        """High-risk band: recovery ride or rest."""
        return self._make(
            IntensityZone.RECOVERY,
            45,
            25,
            "Training load spike detected. Take a recovery ride or a rest day "
            "to reduce injury risk.",
            f"Very easy spinning @ {self._watts(0.50)}W "
            f"({zone_ftp_range(IntensityZone.RECOVERY)} FTP) for 30-45min, "
            "or complete rest",
        )
