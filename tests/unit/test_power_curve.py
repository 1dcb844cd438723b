"""Unit tests for power curve extraction and the power-duration curve."""

import numpy as np
import pandas as pd
import pytest

from power_analytics.exceptions import EmptyInputError, InvalidInputError
from power_analytics.metrics.power_curve import (
    MaximalPowerExtractor,
    PowerDurationCurve,
    build_curve,
    interpolate_sensor_gaps,
    interval_name_from_seconds,
)
from power_analytics.models import PdcPoint


class TestInterpolateSensorGaps:
    """Test dropout interpolation."""

    def test_short_gap_is_interpolated_linearly(self):
        """Test that a short zero run is filled between its neighbours."""
        result = interpolate_sensor_gaps([100, 0, 0, 200])

        assert result.tolist() == [100, 133, 167, 200]

    def test_gap_at_start_uses_right_neighbour(self):
        """Test that a leading zero run takes the first non-zero sample."""
        result = interpolate_sensor_gaps([0, 0, 150, 150])

        assert result.tolist() == [150, 150, 150, 150]

    def test_gap_at_end_uses_left_neighbour(self):
        """Test that a trailing zero run takes the last non-zero sample."""
        result = interpolate_sensor_gaps([180, 180, 0])

        assert result.tolist() == [180, 180, 180]

    def test_long_gap_is_coasting(self):
        """Test that zero runs longer than the limit stay at zero."""
        samples = [100] + [0] * 11 + [100]

        result = interpolate_sensor_gaps(samples, max_gap=10)

        assert result.tolist() == samples

    def test_gap_at_limit_is_filled(self):
        """Test that a run of exactly max_gap zeros is a dropout."""
        samples = [100] + [0] * 10 + [100]

        result = interpolate_sensor_gaps(samples, max_gap=10)

        assert (result == 100).all()

    def test_all_zero_ride_unchanged(self):
        """Test that an all-zero ride is returned as is."""
        result = interpolate_sensor_gaps([0, 0, 0])

        assert result.tolist() == [0, 0, 0]

    def test_input_not_mutated(self):
        """Test that the caller's array is left untouched."""
        samples = np.array([100, 0, 100])

        interpolate_sensor_gaps(samples)

        assert samples.tolist() == [100, 0, 100]


class TestMaximalPowerExtractor:
    """Test mean-maximal power extraction."""

    def test_constant_ride_gives_constant_power(self, constant_ride):
        """Test that a constant ride yields the same power at every duration."""
        extractor = MaximalPowerExtractor()

        points = extractor.extract(constant_ride)

        assert points
        assert all(p.power_watts == 250 for p in points)
        assert max(p.duration_secs for p in points) == 600

    def test_no_points_longer_than_ride(self, constant_ride):
        """Test that durations longer than the ride are skipped."""
        extractor = MaximalPowerExtractor(durations=[60, 600, 601, 1200])

        points = extractor.extract(constant_ride)

        assert [p.duration_secs for p in points] == [60, 600]

    def test_points_in_ascending_order(self, interval_ride):
        """Test that points are sorted by duration."""
        points = MaximalPowerExtractor().extract(interval_ride)

        durations = [p.duration_secs for p in points]
        assert durations == sorted(durations)

    def test_interval_ride_values(self, interval_ride):
        """Test extracted powers for alternating 125W/262W blocks."""
        extractor = MaximalPowerExtractor(durations=[120, 300, 600, 900, 1200])

        points = {p.duration_secs: p.power_watts for p in extractor.extract(interval_ride)}

        assert points[120] == 262
        assert points[300] == 262
        assert points[600] == 193  # (262 + 125) / 2 floored
        assert points[900] == 216  # (2 * 262 + 125) / 3 floored
        assert points[1200] == 193

    def test_power_is_floored(self):
        """Test that mean power is floored to whole watts."""
        extractor = MaximalPowerExtractor(durations=[2])

        points = extractor.extract([100, 101])

        assert points[0].power_watts == 100

    def test_dropouts_are_filled_before_extraction(self, ride_with_dropouts):
        """Test that a short dropout does not drag down the 30s power."""
        extractor = MaximalPowerExtractor(durations=[30])

        points = extractor.extract(ride_with_dropouts)

        assert points[0].power_watts == 200

    def test_accepts_pandas_series(self, constant_ride):
        """Test that a pandas Series is accepted."""
        extractor = MaximalPowerExtractor(durations=[60])

        points = extractor.extract(pd.Series(constant_ride))

        assert points[0].power_watts == 250

    def test_empty_ride_raises(self):
        """Test that empty samples raise EmptyInputError."""
        with pytest.raises(EmptyInputError):
            MaximalPowerExtractor().extract([])

    def test_negative_samples_raise(self):
        """Test that negative watts are rejected."""
        with pytest.raises(InvalidInputError):
            MaximalPowerExtractor().extract([100, -5, 100])

    def test_durations_from_settings(self, settings):
        """Test that default durations come from settings."""
        extractor = MaximalPowerExtractor(settings)

        assert extractor.durations == settings.durations
        assert extractor.durations[0] == 1
        assert extractor.durations[-1] == 7200

    def test_extract_single(self, interval_ride):
        """Test single-duration extraction."""
        extractor = MaximalPowerExtractor()

        assert extractor.extract_single(interval_ride, 300) == 262
        assert extractor.extract_single(interval_ride, 7200) is None


class TestPowerDurationCurveUpdate:
    """Test merging efforts into the curve."""

    def test_update_returns_only_improvements(self):
        """Test that only strictly better points are reported."""
        curve = PowerDurationCurve.from_dict({60: 400, 300: 300})

        improved = curve.update(
            [
                PdcPoint(duration_secs=60, power_watts=400),
                PdcPoint(duration_secs=300, power_watts=310),
                PdcPoint(duration_secs=600, power_watts=280),
            ]
        )

        assert [p.duration_secs for p in improved] == [300, 600]
        assert curve.power_at(60) == 400
        assert curve.power_at(300) == 310
        assert curve.power_at(600) == 280

    def test_update_never_lowers(self):
        """Test that weaker efforts leave the curve unchanged."""
        curve = PowerDurationCurve.from_dict({60: 400})

        improved = curve.update([PdcPoint(duration_secs=60, power_watts=350)])

        assert improved == []
        assert curve.power_at(60) == 400

    def test_zero_power_never_creates_entry(self):
        """Test that a zero-watt point does not create an entry."""
        curve = PowerDurationCurve()

        improved = curve.update([PdcPoint(duration_secs=60, power_watts=0)])

        assert improved == []
        assert 60 not in curve

    def test_update_is_monotone(self, interval_ride, constant_ride):
        """Test that every stored value is non-decreasing across updates."""
        extractor = MaximalPowerExtractor()
        curve = PowerDurationCurve()
        curve.update(extractor.extract(interval_ride))
        before = curve.as_dict()

        curve.update(extractor.extract(constant_ride))

        for duration, watts in before.items():
            assert curve.power_at(duration) >= watts

    def test_reset_clears_curve(self, hyperbolic_curve):
        """Test that reset removes every entry."""
        hyperbolic_curve.reset()

        assert hyperbolic_curve.is_empty
        assert len(hyperbolic_curve) == 0


class TestPowerDurationCurveQueries:
    """Test curve lookups."""

    def test_power_at_exact_only(self, hyperbolic_curve):
        """Test that power_at does not interpolate."""
        assert hyperbolic_curve.power_at(300) == 316
        assert hyperbolic_curve.power_at(301) is None

    def test_interpolated_power_at(self, hyperbolic_curve):
        """Test linear interpolation between stored points."""
        assert hyperbolic_curve.interpolated_power_at(900) == pytest.approx(274.5)
        assert hyperbolic_curve.interpolated_power_at(1) == pytest.approx(1000)
        assert hyperbolic_curve.interpolated_power_at(5000) == pytest.approx(266)

    def test_interpolated_power_on_empty_curve(self, empty_curve):
        """Test that an empty curve has no interpolated power."""
        assert empty_curve.interpolated_power_at(300) is None

    def test_sufficient_data_for_cp(self, hyperbolic_curve):
        """Test the CP-fit readiness check on a full curve."""
        assert hyperbolic_curve.has_sufficient_data_for_cp()

    def test_insufficient_points_for_cp(self):
        """Test that two points in the band are not enough."""
        curve = PowerDurationCurve.from_dict({120: 400, 1200: 260})

        assert not curve.has_sufficient_data_for_cp()

    def test_insufficient_span_for_cp(self):
        """Test that clustered points are not enough."""
        curve = PowerDurationCurve.from_dict({120: 400, 180: 360, 300: 320})

        assert not curve.has_sufficient_data_for_cp()

    def test_points_outside_band_ignored_for_cp(self):
        """Test that points outside 2-20 minutes do not count."""
        curve = PowerDurationCurve.from_dict({5: 900, 60: 500, 120: 400, 3600: 240})

        assert not curve.has_sufficient_data_for_cp()

    def test_has_data_near(self, hyperbolic_curve):
        """Test tolerance-based presence check."""
        assert hyperbolic_curve.has_data_near(310, tolerance_secs=10)
        assert not hyperbolic_curve.has_data_near(400, tolerance_secs=10)

    def test_to_series(self, hyperbolic_curve):
        """Test pandas export."""
        series = hyperbolic_curve.to_series()

        assert series.index.name == "duration_secs"
        assert series.loc[1200] == 266
        assert list(series.index) == sorted(series.index)

    def test_copy_is_independent(self, hyperbolic_curve):
        """Test that updating a copy leaves the original alone."""
        clone = hyperbolic_curve.copy()

        clone.update([PdcPoint(duration_secs=300, power_watts=400)])

        assert hyperbolic_curve.power_at(300) == 316
        assert clone.power_at(300) == 400

    def test_max_duration(self, hyperbolic_curve, empty_curve):
        """Test the longest stored duration."""
        assert hyperbolic_curve.max_duration == 1200
        assert empty_curve.max_duration is None


class TestBuildCurve:
    """Test batch curve construction."""

    def test_build_curve_takes_best_of_rides(self, constant_ride, interval_ride):
        """Test that the batch curve holds the best effort per duration."""
        curve = build_curve([constant_ride, [], interval_ride])

        assert curve.power_at(300) == 262
        assert curve.power_at(600) == 250
        assert curve.power_at(3600) == 193


class TestIntervalNames:
    """Test interval naming."""

    @pytest.mark.parametrize(
        "seconds,name",
        [(5, "5sec"), (60, "1min"), (300, "5min"), (5400, "90min"), (7200, "2hr")],
    )
    def test_interval_name_from_seconds(self, seconds, name):
        """Test conversion of seconds to interval names."""
        assert interval_name_from_seconds(seconds) == name
