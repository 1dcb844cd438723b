"""
Critical power modeling.

This module fits the two-parameter hyperbolic model P(t) = CP + W'/t to the
power-duration curve. The fit is the linear work-time form: each point is
converted to work W = P * t and regressed on t, so the slope is CP and the
intercept is W'.
"""

import logging
from collections.abc import Iterable

import numpy as np
from scipy.stats import linregress

from ..constants import CriticalPowerBand
from ..exceptions import InsufficientDataError, InvalidInputError, InvalidModelError
from ..models import CpModel
from ..settings import Settings
from .base import BaseAnalyticsComponent
from .power_curve import PowerDurationCurve

logger = logging.getLogger(__name__)


# pylint: disable=C0103  # Allow short variable names for mathematical functions.
def hyperbolic_model(
    t: np.ndarray | float, CP: float, W_prime: float
) -> np.ndarray | float:
    """
    Hyperbolic power-duration model: P(t) = CP + W' / t.

    Args:
        t: Duration in seconds
        CP: Critical Power
        W_prime: Anaerobic Work Capacity

    Returns:
        Predicted power output
    """
    t = np.asarray(t, dtype=float)
    if (t <= 0).any():
        raise InvalidInputError("Durations must be positive")
    return CP + W_prime / t


class CriticalPowerFitter(BaseAnalyticsComponent):
    """
    Fits a CpModel from the points of a power-duration curve.

    Only points inside the inclusive duration band are used.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        min_duration: int | None = None,
        max_duration: int | None = None,
    ):
        """
        Initialize the fitter.

        Args:
            settings: Application settings
            min_duration: Shortest duration used in the fit (seconds)
            max_duration: Longest duration used in the fit (seconds)
        """
        super().__init__(settings)
        self.min_duration = (
            self.settings.cp_min_duration if min_duration is None else min_duration
        )
        self.max_duration = (
            self.settings.cp_max_duration if max_duration is None else max_duration
        )

    def fit(self, pdc: PowerDurationCurve) -> CpModel:
        """
        Fit CP and W' to the curve's points inside the band.

        Args:
            pdc: Power-duration curve

        Returns:
            Fitted CpModel

        Raises:
            InsufficientDataError: If fewer than two usable points exist
            InvalidModelError: If the fit gives non-positive CP or W'
        """
        pairs = [
            (point.duration_secs, point.power_watts)
            for point in pdc.points()
            if self.min_duration <= point.duration_secs <= self.max_duration
        ]
        return self.fit_points(pairs)

    def fit_points(self, mmp_data: Iterable[tuple[int, float]]) -> CpModel:
        """
        Fit CP and W' to explicit (duration, power) pairs.

        Args:
            mmp_data: (duration_secs, power_watts) pairs

        Returns:
            Fitted CpModel
        """
        mmp_data = list(mmp_data)
        if len(mmp_data) < CriticalPowerBand.MIN_POINTS_FOR_FIT:
            raise InsufficientDataError(
                f"Need at least {CriticalPowerBand.MIN_POINTS_FOR_FIT} points "
                f"for a CP fit, got {len(mmp_data)}"
            )

        durations = np.array([d for d, _ in mmp_data], dtype=float)
        powers = np.array([p for _, p in mmp_data], dtype=float)
        if np.unique(durations).size < 2:
            raise InsufficientDataError("CP fit needs at least two distinct durations")

        work = powers * durations
        regression = linregress(durations, work)
        cp = int(round(regression.slope))
        w_prime = int(round(regression.intercept))
        r_squared = float(regression.rvalue**2)

        if cp <= 0 or w_prime <= 0:
            raise InvalidModelError(
                f"CP fit gave non-physiological parameters: CP={cp}W, W'={w_prime}J"
            )

        self.logger.debug(
            f"Fitted CP={cp}W, W'={w_prime}J (r²={r_squared:.3f}) "
            f"from {len(mmp_data)} points"
        )
        return CpModel(cp=cp, w_prime=w_prime, r_squared=r_squared)
