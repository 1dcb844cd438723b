"""
Rider profile classification.

Normalises the rider's best efforts at four characteristic durations by FTP
and compares each ratio with a population baseline to find the rider's
standout strength.
"""

import logging

from ..constants import RiderProfileBaselines
from ..exceptions import InvalidInputError
from ..metrics.base import BaseAnalyticsComponent
from ..metrics.power_curve import PowerDurationCurve
from ..models import PowerProfile, RiderType
from ..settings import Settings

logger = logging.getLogger(__name__)

# Rider type that each duration band identifies, in band order
_BAND_TYPES = (
    RiderType.SPRINTER,
    RiderType.PURSUITER,
    RiderType.CLIMBER,
    RiderType.TIME_TRIALIST,
)


class RiderProfileClassifier(BaseAnalyticsComponent):
    """Classifies a rider from their FTP-normalised power profile."""

    def __init__(self, ftp: float, settings: Settings | None = None):
        """
        Initialize the classifier.

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

    def profile_from_pdc(self, pdc: PowerDurationCurve) -> PowerProfile:
        """
        Build the power profile from the curve's exact points.

        A missing point leaves its ratio as None.
        """
        return PowerProfile(
            short_ratio=self._ratio(pdc, RiderProfileBaselines.SHORT_DURATION),
            short_middle_ratio=self._ratio(
                pdc, RiderProfileBaselines.SHORT_MIDDLE_DURATION
            ),
            middle_ratio=self._ratio(pdc, RiderProfileBaselines.MIDDLE_DURATION),
            long_ratio=self._ratio(pdc, RiderProfileBaselines.LONG_DURATION),
        )

    def _ratio(self, pdc: PowerDurationCurve, duration_secs: int) -> float | None:
        power = pdc.power_at(duration_secs)
        return None if power is None else power / self.ftp

    def classify(self, profile: PowerProfile) -> RiderType:
        """
        Classify the rider type.

        Each band scores ratio / baseline - 1. The best band defines the rider
        when it beats its baseline by MIN_EXCESS and leads the runner-up by
        TIE_MARGIN; otherwise the rider is an all-rounder.

        Returns:
            RiderType; Unknown when any ratio is missing
        """
        if not profile.is_complete:
            return RiderType.UNKNOWN

        scores = list(profile.scores().values())
        ranked = sorted(range(len(scores)), key=scores.__getitem__, reverse=True)
        best, runner_up = scores[ranked[0]], scores[ranked[1]]

        if (
            best >= RiderProfileBaselines.MIN_EXCESS
            and best - runner_up >= RiderProfileBaselines.TIE_MARGIN
        ):
            rider_type = _BAND_TYPES[ranked[0]]
        else:
            rider_type = RiderType.ALL_ROUNDER

        self.logger.debug(
            f"Rider scores {[round(s, 3) for s in scores]} -> {rider_type.value}"
        )
        return rider_type

    def classify_pdc(self, pdc: PowerDurationCurve) -> RiderType:
        """Build the profile from a curve and classify it."""
        return self.classify(self.profile_from_pdc(pdc))
