"""
Threshold estimation service.

This module provides FTP estimation from the power-duration curve, falling
back to the critical power model when no 20-minute effort is on record.
"""

import logging

from ..constants import CriticalPowerBand, PowerCurveDurations
from ..exceptions import InsufficientDataError, InvalidInputError
from ..metrics.base import BaseAnalyticsComponent
from ..metrics.power_curve import PowerDurationCurve
from ..models import CpModel, FtpConfidence, FtpEstimate, FtpMethod

logger = logging.getLogger(__name__)


class FtpEstimator(BaseAnalyticsComponent):
    """
    Service for estimating Functional Threshold Power.

    Sources in order of preference:
    1. The 20-minute best effort times the estimation factor (0.95)
    2. Critical power from a fitted CP model
    """

    def estimate(
        self, pdc: PowerDurationCurve, cp_model: CpModel | None = None
    ) -> FtpEstimate:
        """
        Estimate FTP.

        Args:
            pdc: Power-duration curve
            cp_model: Fitted critical power model, if available

        Returns:
            FtpEstimate with method and confidence

        Raises:
            InsufficientDataError: If neither a 20-minute point nor a CP model
                is available
        """
        twenty_minute = pdc.power_at(PowerCurveDurations.DURATION_20MIN)
        if twenty_minute:
            ftp = round(twenty_minute * self.settings.ftp_estimation_factor)
            self.logger.debug(f"FTP {ftp}W from 20-minute power {twenty_minute}W")
            return FtpEstimate(
                ftp_watts=ftp,
                method=FtpMethod.TWENTY_MINUTE,
                confidence=FtpConfidence.HIGH,
                supporting_data=[(PowerCurveDurations.DURATION_20MIN, twenty_minute)],
            )

        if cp_model is not None:
            confidence = (
                FtpConfidence.MEDIUM
                if cp_model.r_squared > CriticalPowerBand.HIGH_QUALITY_R_SQUARED
                else FtpConfidence.LOW
            )
            self.logger.debug(
                f"FTP {cp_model.cp}W from critical power (r²={cp_model.r_squared:.3f})"
            )
            return FtpEstimate(
                ftp_watts=cp_model.cp,
                method=FtpMethod.CRITICAL_POWER,
                confidence=confidence,
                supporting_data=[
                    (point.duration_secs, point.power_watts)
                    for point in pdc.points()
                    if self.settings.cp_min_duration
                    <= point.duration_secs
                    <= self.settings.cp_max_duration
                ],
            )

        raise InsufficientDataError(
            "FTP estimation needs a 20-minute effort or a critical power model"
        )

    @staticmethod
    def change_percent(current_ftp: float, new_ftp: float) -> float:
        """
        Percentage change from the current FTP to a new value.

        Raises:
            InvalidInputError: If the current FTP is not positive
        """
        if current_ftp <= 0:
            raise InvalidInputError(f"Current FTP must be positive, got {current_ftp}")
        return (new_ftp - current_ftp) / current_ftp * 100.0

    def is_significant_change(self, current_ftp: float, estimate: FtpEstimate) -> bool:
        """Whether an estimate moves FTP by more than the configured fraction."""
        change = abs(self.change_percent(current_ftp, estimate.ftp_watts))
        return change > self.settings.ftp_significant_change * 100.0
