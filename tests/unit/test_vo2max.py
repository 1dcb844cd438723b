"""Unit tests for VO2max estimation."""

import pytest

from power_analytics.exceptions import InsufficientDataError, InvalidInputError
from power_analytics.metrics.power_curve import PowerDurationCurve
from power_analytics.metrics.vo2max import Vo2maxEstimator, classify_fitness
from power_analytics.models import FitnessLevel, Vo2maxMethod


class TestVo2maxEstimator:
    """Test VO2max from the power-duration curve."""

    def test_estimate_from_five_minute_point(self):
        """Test VO2max = 10.8 * P5 / kg + 7."""
        curve = PowerDurationCurve.from_dict({300: 350})

        result = Vo2maxEstimator(70).estimate(curve)

        assert result.vo2max == pytest.approx(61.0)
        assert result.method == Vo2maxMethod.FIVE_MINUTE_POWER
        assert result.classification == FitnessLevel.WELL_TRAINED

    def test_uses_exact_point_only(self):
        """Test that neighbouring durations are not used."""
        curve = PowerDurationCurve.from_dict({240: 380, 360: 330})

        with pytest.raises(InsufficientDataError):
            Vo2maxEstimator(70).estimate(curve)

    def test_empty_curve_raises(self, empty_curve):
        """Test that an empty curve gives no estimate."""
        with pytest.raises(InsufficientDataError):
            Vo2maxEstimator(70).estimate(empty_curve)

    @pytest.mark.parametrize("weight", [0, -70])
    def test_non_positive_weight_raises(self, weight):
        """Test that body mass must be positive."""
        with pytest.raises(InvalidInputError):
            Vo2maxEstimator(weight)

    def test_from_ftp(self):
        """Test VO2max = FTP / kg * 12 + 3.5."""
        result = Vo2maxEstimator(75).from_ftp(250)

        assert result.vo2max == pytest.approx(43.5)
        assert result.method == Vo2maxMethod.FTP_BASED
        assert result.classification == FitnessLevel.RECREATIONAL

    def test_from_critical_power(self):
        """Test VO2max = CP / kg * 12.5 + 2."""
        result = Vo2maxEstimator(80).from_critical_power(320)

        assert result.vo2max == pytest.approx(52.0)
        assert result.method == Vo2maxMethod.CRITICAL_POWER_BASED


class TestFitnessClassification:
    """Test fitness level banding."""

    @pytest.mark.parametrize(
        "vo2max,level",
        [
            (30.0, FitnessLevel.UNTRAINED),
            (35.0, FitnessLevel.RECREATIONAL),
            (50.0, FitnessLevel.TRAINED),
            (60.0, FitnessLevel.WELL_TRAINED),
            (70.0, FitnessLevel.ELITE),
            (80.0, FitnessLevel.WORLD_CLASS),
        ],
    )
    def test_classify_fitness(self, vo2max, level):
        """Test band boundaries."""
        assert classify_fitness(vo2max) == level

    def test_level_description(self):
        """Test that each level is described."""
        assert "Elite" in FitnessLevel.ELITE.description
