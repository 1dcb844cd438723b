"""
Incremental recompute after a ride.

The orchestrator runs the engine's components in dependency order after each
completed ride and reports what changed. It owns no state between calls: the
caller passes in the rider's curve and prior load and applies the result.
"""

import datetime as dt
import logging
from collections.abc import Iterable

from .constants import PowerCurveDurations
from .exceptions import AnalyticsUnavailableError, InvalidInputError
from .metrics.critical_power import CriticalPowerFitter
from .metrics.power_curve import MaximalPowerExtractor, PowerDurationCurve, PowerSamples
from .metrics.training_load import TrainingLoadTracker
from .metrics.vo2max import Vo2maxEstimator
from .models import CpModel, DailyLoad, PdcPoint, TriggerResult, Vo2maxResult
from .settings import Settings

logger = logging.getLogger(__name__)


def touches_cp_band(
    improved: Iterable[PdcPoint], min_duration: int, max_duration: int
) -> bool:
    """Whether any improved point lies inside the CP fit band."""
    return any(min_duration <= p.duration_secs <= max_duration for p in improved)


def touches_five_minute(improved: Iterable[PdcPoint]) -> bool:
    """Whether the 5-minute point improved."""
    return any(p.duration_secs == PowerCurveDurations.DURATION_5MIN for p in improved)


class AnalyticsOrchestrator:
    """
    Runs the post-ride trigger chain.

    1. Extract MMP and merge it into a copy of the curve
    2. Refit CP when the CP band improved and the curve supports a fit
    3. Recompute VO2max when the 5-minute point improved
    4. Advance training load when the ride has a TSS
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize the orchestrator.

        Args:
            settings: Application settings
        """
        self.settings = settings or Settings()
        self.extractor = MaximalPowerExtractor(self.settings)
        self.cp_fitter = CriticalPowerFitter(self.settings)
        self.load_tracker = TrainingLoadTracker(self.settings)
        self.logger = logging.getLogger(__name__)

    def run(
        self,
        samples: PowerSamples,
        ride_tss: float | None = None,
        pdc: PowerDurationCurve | None = None,
        prior_load: DailyLoad | None = None,
        ride_date: dt.date | None = None,
        weight_kg: float | None = None,
    ) -> TriggerResult:
        """
        Process one completed ride.

        Args:
            samples: Per-second power in watts
            ride_tss: The ride's TSS; training load is left alone when None
            pdc: The rider's current curve (never mutated)
            prior_load: Last known daily load
            ride_date: Day of the ride
            weight_kg: Body mass for VO2max (defaults to the configured weight)

        Returns:
            TriggerResult describing everything that changed
        """
        curve = pdc.copy() if pdc is not None else PowerDurationCurve()
        improved = self._update_curve(curve, samples)

        cp_model = None
        if touches_cp_band(
            improved, self.settings.cp_min_duration, self.settings.cp_max_duration
        ):
            cp_model = self._refit_cp(curve)

        vo2max = None
        if touches_five_minute(improved):
            vo2max = self._recompute_vo2max(curve, weight_kg)

        daily_load = None
        if ride_tss is not None:
            daily_load = self._advance_load(prior_load, ride_tss, ride_date)

        return TriggerResult(
            pdc_updated=tuple(improved),
            new_cp_model=cp_model,
            new_daily_load=daily_load,
            new_vo2max=vo2max,
        )

    def _update_curve(
        self, curve: PowerDurationCurve, samples: PowerSamples
    ) -> list[PdcPoint]:
        try:
            points = self.extractor.extract(samples)
        except AnalyticsUnavailableError as e:
            self.logger.info(f"No power curve update: {e}")
            return []
        improved = curve.update(points)
        if improved:
            durations = ", ".join(str(p.duration_secs) for p in improved)
            self.logger.info(f"New personal bests at {durations}s")
        return improved

    def _refit_cp(self, curve: PowerDurationCurve) -> CpModel | None:
        if not curve.has_sufficient_data_for_cp(
            self.settings.cp_min_duration,
            self.settings.cp_max_duration,
            self.settings.cp_min_points,
            self.settings.cp_min_span_secs,
        ):
            self.logger.info("CP band improved but the curve cannot support a fit yet")
            return None
        try:
            model = self.cp_fitter.fit(curve)
        except AnalyticsUnavailableError as e:
            self.logger.info(f"CP refit skipped: {e}")
            return None
        self.logger.info(f"CP refitted: CP={model.cp}W, W'={model.w_prime}J")
        return model

    def _recompute_vo2max(
        self, curve: PowerDurationCurve, weight_kg: float | None
    ) -> Vo2maxResult | None:
        weight = self.settings.rider_weight_kg if weight_kg is None else weight_kg
        try:
            result = Vo2maxEstimator(weight, self.settings).estimate(curve)
        except AnalyticsUnavailableError as e:
            self.logger.info(f"VO2max recompute skipped: {e}")
            return None
        self.logger.info(f"VO2max recomputed: {result.vo2max:.1f} ml/kg/min")
        return result

    def _advance_load(
        self,
        prior_load: DailyLoad | None,
        ride_tss: float,
        ride_date: dt.date | None,
    ) -> DailyLoad | None:
        # A second ride on an already tracked day cannot move the load forward
        try:
            load = self.load_tracker.advance(prior_load, ride_tss, ride_date)
        except InvalidInputError as e:
            self.logger.warning(f"Training load not updated: {e}")
            return None
        self.logger.info(
            f"Training load on {load.date}: ATL={load.atl:.1f}, "
            f"CTL={load.ctl:.1f}, TSB={load.tsb:.1f}"
        )
        return load

    @staticmethod
    def apply(pdc: PowerDurationCurve, result: TriggerResult) -> list[PdcPoint]:
        """
        Merge a result's improved points into a caller-owned curve.

        Returns:
            The points that improved ``pdc``
        """
        return pdc.update(result.pdc_updated)
