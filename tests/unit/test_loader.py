"""Unit tests for the file data loader."""

import datetime as dt
from pathlib import Path

import pytest

from power_analytics.data.loader import DataLoaderProtocol, RideDataLoader
from power_analytics.exceptions import DataLoadError
from power_analytics.metrics.power_curve import PowerDurationCurve


class TestLoadPowerSamples:
    """Test loading power streams."""

    def test_load_stream(self, stream_csv: Path, interval_ride):
        """Test that the watts column is loaded in order."""
        samples = RideDataLoader().load_power_samples(stream_csv)

        assert samples.tolist() == interval_ride

    def test_missing_readings_become_zero(self, tmp_path: Path):
        """Test that blank watts are read as zero power."""
        path = tmp_path / "stream.csv"
        path.write_text("time;watts\n0;200\n1;\n2;210\n", encoding="utf-8")

        samples = RideDataLoader().load_power_samples(path)

        assert samples.tolist() == [200, 0, 210]

    def test_missing_column_raises(self, tmp_path: Path):
        """Test that a stream without power raises DataLoadError."""
        path = tmp_path / "stream.csv"
        path.write_text("time;heartrate\n0;140\n", encoding="utf-8")

        with pytest.raises(DataLoadError):
            RideDataLoader().load_power_samples(path)

    def test_missing_file_raises(self, tmp_path: Path):
        """Test that a missing file raises DataLoadError."""
        with pytest.raises(DataLoadError):
            RideDataLoader().load_power_samples(tmp_path / "nope.csv")


class TestLoadDailyTss:
    """Test loading TSS history."""

    def test_load_tss(self, tss_csv: Path):
        """Test dated TSS pairs with a blank entry."""
        pairs = RideDataLoader().load_daily_tss(tss_csv)

        assert pairs == [
            (dt.date(2024, 1, 1), 100.0),
            (dt.date(2024, 1, 3), 50.0),
            (dt.date(2024, 1, 3), 30.0),
            (dt.date(2024, 1, 4), None),
        ]


class TestLoadCurveAndLoad:
    """Test loading JSON profile data."""

    def test_load_curve(self, curve_json: Path, hyperbolic_curve):
        """Test that a stored curve round-trips through JSON."""
        curve = RideDataLoader().load_curve(curve_json)

        assert curve == hyperbolic_curve

    def test_save_curve(self, tmp_path: Path, hyperbolic_curve):
        """Test writing a curve to disk."""
        loader = RideDataLoader()
        path = tmp_path / "saved.json"

        loader.save_curve(hyperbolic_curve, path)

        assert loader.load_curve(path).power_at(300) == 316

    def test_invalid_curve_raises(self, tmp_path: Path):
        """Test that a non-object curve file raises DataLoadError."""
        path = tmp_path / "curve.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        with pytest.raises(DataLoadError):
            RideDataLoader().load_curve(path)

    def test_load_daily_load(self, load_json: Path, prior_load):
        """Test loading a DailyLoad snapshot."""
        assert RideDataLoader().load_daily_load(load_json) == prior_load

    def test_invalid_daily_load_raises(self, tmp_path: Path):
        """Test that a malformed snapshot raises DataLoadError."""
        path = tmp_path / "load.json"
        path.write_text('{"atl": 10}', encoding="utf-8")

        with pytest.raises(DataLoadError):
            RideDataLoader().load_daily_load(path)

    def test_empty_curve_file(self, tmp_path: Path):
        """Test that an empty JSON object gives an empty curve."""
        path = tmp_path / "curve.json"
        path.write_text("{}", encoding="utf-8")

        assert RideDataLoader().load_curve(path) == PowerDurationCurve()


class TestLoaderProtocol:
    """Test the loader interface used by the command line."""

    def test_ride_loader_satisfies_protocol(self):
        """Test that RideDataLoader provides every protocol method."""
        assert isinstance(RideDataLoader(), DataLoaderProtocol)
