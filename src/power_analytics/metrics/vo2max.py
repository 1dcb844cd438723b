"""
VO2max estimation from power data.

The primary estimate uses the Hawley-Noakes relation between 5-minute
maximal power and VO2max. FTP- and CP-based estimates are available for
riders without a recent 5-minute effort.
"""

import logging

from ..constants import PowerCurveDurations, Vo2maxConstants
from ..exceptions import InsufficientDataError, InvalidInputError
from ..models import FitnessLevel, Vo2maxMethod, Vo2maxResult
from ..settings import Settings
from .base import BaseAnalyticsComponent
from .power_curve import PowerDurationCurve

logger = logging.getLogger(__name__)


def classify_fitness(vo2max: float) -> FitnessLevel:
    """Classify fitness level from VO2max in ml/kg/min."""
    if vo2max < Vo2maxConstants.UNTRAINED_MAX:
        return FitnessLevel.UNTRAINED
    if vo2max < Vo2maxConstants.RECREATIONAL_MAX:
        return FitnessLevel.RECREATIONAL
    if vo2max < Vo2maxConstants.TRAINED_MAX:
        return FitnessLevel.TRAINED
    if vo2max < Vo2maxConstants.WELL_TRAINED_MAX:
        return FitnessLevel.WELL_TRAINED
    if vo2max < Vo2maxConstants.ELITE_MAX:
        return FitnessLevel.ELITE
    return FitnessLevel.WORLD_CLASS


class Vo2maxEstimator(BaseAnalyticsComponent):
    """Estimates VO2max for a rider of known body mass."""

    def __init__(self, weight_kg: float, settings: Settings | None = None):
        """
        Initialize the estimator.

        Args:
            weight_kg: Rider body mass in kilograms
            settings: Application settings

        Raises:
            InvalidInputError: If the body mass is not positive
        """
        super().__init__(settings)
        if weight_kg <= 0:
            raise InvalidInputError(f"Body mass must be positive, got {weight_kg}")
        self.weight_kg = float(weight_kg)

    def estimate(self, pdc: PowerDurationCurve) -> Vo2maxResult:
        """
        Estimate VO2max from the curve's exact 5-minute point.

        Raises:
            InsufficientDataError: If the curve has no 5-minute point
        """
        five_minute_power = pdc.power_at(PowerCurveDurations.DURATION_5MIN)
        if not five_minute_power:
            raise InsufficientDataError("No 5-minute power available for VO2max")
        return self.from_five_minute_power(five_minute_power)

    def from_five_minute_power(self, power_watts: float) -> Vo2maxResult:
        """VO2max = 10.8 × P5min / kg + 7."""
        return self._result(
            power_watts,
            Vo2maxConstants.FIVE_MIN_SLOPE,
            Vo2maxConstants.FIVE_MIN_OFFSET,
            Vo2maxMethod.FIVE_MINUTE_POWER,
        )

    def from_ftp(self, ftp_watts: float) -> Vo2maxResult:
        """VO2max = FTP / kg × 12 + 3.5."""
        return self._result(
            ftp_watts,
            Vo2maxConstants.FTP_SLOPE,
            Vo2maxConstants.FTP_OFFSET,
            Vo2maxMethod.FTP_BASED,
        )

    def from_critical_power(self, cp_watts: float) -> Vo2maxResult:
        """VO2max = CP / kg × 12.5 + 2."""
        return self._result(
            cp_watts,
            Vo2maxConstants.CP_SLOPE,
            Vo2maxConstants.CP_OFFSET,
            Vo2maxMethod.CRITICAL_POWER_BASED,
        )

    def _result(
        self, power_watts: float, slope: float, offset: float, method: Vo2maxMethod
    ) -> Vo2maxResult:
        if power_watts <= 0:
            raise InvalidInputError(f"Power must be positive, got {power_watts}")
        vo2max = slope * power_watts / self.weight_kg + offset
        self.logger.debug(f"VO2max {vo2max:.1f} ml/kg/min via {method.value}")
        return Vo2maxResult(
            vo2max=vo2max, classification=classify_fitness(vo2max), method=method
        )
