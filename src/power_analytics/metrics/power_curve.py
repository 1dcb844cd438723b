"""
Power-duration curve analysis.

This module provides mean-maximal power extraction from per-second power
samples and the running-maximum power-duration curve (PDC) the extracted
values are merged into.
"""

import logging
from collections.abc import Iterable, Sequence

import numpy as np
import pandas as pd

from ..constants import CriticalPowerBand, TimeConstants
from ..exceptions import EmptyInputError, InvalidInputError
from ..models import PdcPoint
from ..settings import Settings
from .base import BaseAnalyticsComponent

logger = logging.getLogger(__name__)

PowerSamples = Sequence[int] | np.ndarray | pd.Series


def _as_watts(samples: PowerSamples) -> np.ndarray:
    """Convert samples to a validated int64 array without touching the input."""
    arr = np.asarray(samples, dtype=float)
    if arr.ndim != 1:
        raise InvalidInputError("Power samples must be one-dimensional")
    if np.isnan(arr).any():
        raise InvalidInputError("Power samples contain missing values")
    if (arr < 0).any():
        raise InvalidInputError("Power samples must be non-negative")
    return np.rint(arr).astype(np.int64)


def interpolate_sensor_gaps(
    samples: PowerSamples, max_gap: int = TimeConstants.MAX_DROPOUT_GAP
) -> np.ndarray:
    """
    Fill short runs of zero power left by sensor dropouts.

    Runs of zeros no longer than ``max_gap`` samples are linearly interpolated
    between the surrounding non-zero samples. A run at either end of the ride
    takes the single available neighbour. Longer runs are genuine coasting and
    stay at zero.

    Args:
        samples: Per-second power in watts
        max_gap: Longest zero run (in samples) treated as a dropout

    Returns:
        New int64 array of watts; the input is left untouched
    """
    watts = _as_watts(samples)
    n = len(watts)
    if n == 0 or max_gap <= 0:
        return watts

    is_zero = np.concatenate(([False], watts == 0, [False]))
    edges = np.flatnonzero(np.diff(is_zero.astype(np.int8)))
    starts, ends = edges[::2], edges[1::2]

    filled = watts.astype(float)
    for start, end in zip(starts, ends, strict=True):
        length = end - start
        if length > max_gap:
            continue
        left = watts[start - 1] if start > 0 else None
        right = watts[end] if end < n else None
        if left is None and right is None:
            continue  # all-zero ride
        if left is None:
            filled[start:end] = right
        elif right is None:
            filled[start:end] = left
        else:
            steps = np.arange(1, length + 1) / (length + 1)
            filled[start:end] = left + (right - left) * steps

    return np.rint(filled).astype(np.int64)


def interval_name_from_seconds(seconds: int) -> str:
    """
    Convert duration in seconds to interval name.

    Args:
        seconds: Duration in seconds

    Returns:
        Interval name (e.g., "1min", "5min", "20sec", "1hr")
    """
    if seconds < 60:
        return f"{seconds}sec"
    if seconds % 3600 == 0:
        return f"{seconds // 3600}hr"
    if seconds % 60 == 0:
        return f"{seconds // 60}min"
    return f"{seconds}sec"  # Fallback for other durations


class MaximalPowerExtractor(BaseAnalyticsComponent):
    """
    Extracts mean-maximal power (MMP) for a set of target durations.

    Each duration is scanned in O(n) using a prefix sum over the gap-filled
    samples.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        durations: Iterable[int] | None = None,
        max_gap: int | None = None,
    ):
        """
        Initialize the extractor.

        Args:
            settings: Application settings
            durations: Target durations in seconds (defaults to the configured
                power curve intervals)
            max_gap: Longest zero run treated as a sensor dropout
        """
        super().__init__(settings)
        chosen = self.settings.durations if durations is None else durations
        self.durations = sorted({int(d) for d in chosen})
        if not self.durations or self.durations[0] <= 0:
            raise InvalidInputError("Target durations must be positive")
        self.max_gap = self.settings.max_dropout_gap_secs if max_gap is None else max_gap

    def extract(self, samples: PowerSamples) -> list[PdcPoint]:
        """
        Compute the best mean power for each target duration.

        Args:
            samples: Per-second power in watts

        Returns:
            One PdcPoint per target duration no longer than the ride, in
            ascending duration order

        Raises:
            EmptyInputError: If there are no samples
            InvalidInputError: If any sample is negative
        """
        if len(samples) == 0:
            raise EmptyInputError("Cannot extract power from an empty ride")

        watts = interpolate_sensor_gaps(samples, self.max_gap)
        cumulative = np.concatenate(([0], np.cumsum(watts)))
        n = len(watts)

        points = []
        for duration in self.durations:
            if duration > n:
                break
            window_sums = cumulative[duration:] - cumulative[:-duration]
            points.append(
                PdcPoint(
                    duration_secs=duration,
                    power_watts=int(window_sums.max() // duration),
                )
            )

        self.logger.debug(f"Extracted {len(points)} MMP points from {n} samples")
        return points

    def extract_single(self, samples: PowerSamples, duration: int) -> int | None:
        """
        Best mean power for one duration.

        Returns:
            Power in watts, or None when the ride is shorter than the duration
        """
        if duration <= 0:
            raise InvalidInputError(f"Duration must be positive, got {duration}")
        if len(samples) < duration:
            return None
        watts = interpolate_sensor_gaps(samples, self.max_gap)
        cumulative = np.concatenate(([0], np.cumsum(watts)))
        return int((cumulative[duration:] - cumulative[:-duration]).max() // duration)


class PowerDurationCurve:
    """
    A rider's best-ever power for each duration.

    Every stored value is a running maximum: ``update`` only ever raises
    entries, and only ``reset`` removes them.
    """

    def __init__(self, points: Iterable[PdcPoint] | None = None):
        self._best: dict[int, int] = {}
        if points is not None:
            self.update(points)

    @classmethod
    def from_points(cls, points: Iterable[PdcPoint]) -> "PowerDurationCurve":
        """Build a curve from existing points."""
        return cls(points)

    @classmethod
    def from_dict(cls, values: dict[int, int]) -> "PowerDurationCurve":
        """Build a curve from a {duration_secs: power_watts} mapping."""
        return cls(
            PdcPoint(duration_secs=int(d), power_watts=int(p))
            for d, p in values.items()
        )

    def update(self, points: Iterable[PdcPoint]) -> list[PdcPoint]:
        """
        Merge new efforts into the curve.

        A point replaces the stored value only when its power is strictly
        greater; a duration with no entry counts as 0 W.

        Args:
            points: Candidate efforts, e.g. from MaximalPowerExtractor

        Returns:
            The points that improved the curve, in input order
        """
        improved = []
        for point in points:
            if point.power_watts > self._best.get(point.duration_secs, 0):
                self._best[point.duration_secs] = point.power_watts
                improved.append(point)
        if improved:
            logger.debug(f"PDC improved at {len(improved)} durations")
        return improved

    def power_at(self, duration_secs: int) -> int | None:
        """Exact stored power for a duration, or None."""
        return self._best.get(duration_secs)

    def interpolated_power_at(self, duration_secs: float) -> float | None:
        """
        Power at an arbitrary duration by linear interpolation.

        Durations outside the stored range are clamped to the nearest end.
        """
        if not self._best:
            return None
        durations = sorted(self._best)
        powers = [self._best[d] for d in durations]
        return float(np.interp(duration_secs, durations, powers))

    def has_data_near(self, duration_secs: int, tolerance_secs: int = 0) -> bool:
        """Whether any stored duration lies within the tolerance."""
        return any(abs(d - duration_secs) <= tolerance_secs for d in self._best)

    def has_sufficient_data_for_cp(
        self,
        min_duration: int = CriticalPowerBand.MIN_DURATION,
        max_duration: int = CriticalPowerBand.MAX_DURATION,
        min_points: int = CriticalPowerBand.MIN_POINTS_FOR_REFIT,
        min_span: int = CriticalPowerBand.MIN_SPAN,
    ) -> bool:
        """
        Whether the curve can support a critical power fit.

        Requires enough distinct durations inside the CP band, spread across at
        least ``min_span`` seconds.
        """
        in_band = [d for d in self._best if min_duration <= d <= max_duration]
        if len(in_band) < min_points:
            return False
        return max(in_band) - min(in_band) >= min_span

    def points(self) -> list[PdcPoint]:
        """All points in ascending duration order."""
        return [
            PdcPoint(duration_secs=d, power_watts=self._best[d])
            for d in sorted(self._best)
        ]

    def as_dict(self) -> dict[int, int]:
        """Curve as an ordered {duration_secs: power_watts} mapping."""
        return {d: self._best[d] for d in sorted(self._best)}

    def to_series(self) -> pd.Series:
        """Curve as a pandas Series indexed by duration in seconds."""
        series = pd.Series(self.as_dict(), name="power_watts", dtype="int64")
        series.index.name = "duration_secs"
        return series

    def copy(self) -> "PowerDurationCurve":
        """Independent copy of the curve."""
        clone = PowerDurationCurve()
        clone._best = dict(self._best)
        return clone

    def reset(self) -> None:
        """Clear the curve (explicit profile reset)."""
        self._best.clear()

    @property
    def is_empty(self) -> bool:
        """Whether the curve holds no points."""
        return not self._best

    @property
    def max_duration(self) -> int | None:
        """Longest stored duration."""
        return max(self._best) if self._best else None

    def __len__(self) -> int:
        return len(self._best)

    def __contains__(self, duration_secs: object) -> bool:
        return duration_secs in self._best

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PowerDurationCurve):
            return NotImplemented
        return self._best == other._best

    def __repr__(self) -> str:
        return f"PowerDurationCurve({self.as_dict()!r})"


def build_curve(
    rides: Iterable[PowerSamples],
    extractor: MaximalPowerExtractor | None = None,
) -> PowerDurationCurve:
    """
    Build a curve from a batch of rides.

    Args:
        rides: Per-second power sample sequences, one per ride
        extractor: Extractor to use (defaults to one with default settings)

    Returns:
        PowerDurationCurve holding the best effort across all rides
    """
    extractor = extractor or MaximalPowerExtractor()
    curve = PowerDurationCurve()
    for index, samples in enumerate(rides):
        if len(samples) == 0:
            logger.debug(f"Skipping empty ride at position {index}")
            continue
        curve.update(extractor.extract(samples))
    return curve
