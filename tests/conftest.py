"""
Shared pytest fixtures for Power Analytics tests.

This module provides reusable fixtures for:
- Settings configurations
- Power sample streams
- Power-duration curves
- Training load snapshots
- Temporary data files
"""

import datetime as dt
import json
from pathlib import Path

import pytest
import yaml

from power_analytics.metrics import PowerDurationCurve
from power_analytics.models import DailyLoad
from power_analytics.settings import Settings

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary YAML config file path for testing."""
    return tmp_path / "config.yaml"


@pytest.fixture
def sample_config_dict() -> dict:
    """Provide a sample configuration dictionary."""
    return {
        "ftp": 250,
        "rider_weight_kg": 70.0,
        "atl_days": 7,
        "ctl_days": 42,
        "cp_min_duration": 120,
        "cp_max_duration": 1200,
    }


@pytest.fixture
def sample_config_file(tmp_path: Path, sample_config_dict: dict) -> Path:
    """Create a temporary config file with sample data."""
    config_path = tmp_path / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config_dict, f)
    return config_path


@pytest.fixture
def settings() -> Settings:
    """Provide default settings."""
    return Settings()


@pytest.fixture
def settings_with_ftp() -> Settings:
    """Provide settings with FTP=250W and a 70kg rider."""
    return Settings(ftp=250, rider_weight_kg=70.0)


# ============================================================================
# Data Fixtures - Power Samples
# ============================================================================


@pytest.fixture
def constant_ride() -> list[int]:
    """Provide a 10-minute ride at a constant 250W."""
    return [250] * 600


@pytest.fixture
def interval_ride() -> list[int]:
    """
    Provide a 60-minute interval ride for a 250W FTP rider.

    Alternates 5-minute blocks at 50% FTP (125W) and 105% FTP (262W),
    starting easy.
    """
    samples = []
    for block in range(12):
        samples += [125 if block % 2 == 0 else 262] * 300
    return samples


@pytest.fixture
def ride_with_dropouts() -> list[int]:
    """Provide a 30-second ride at 200W with a 5-second sensor dropout."""
    return [200] * 10 + [0] * 5 + [200] * 15


# ============================================================================
# Data Fixtures - Power-Duration Curves
# ============================================================================


@pytest.fixture
def hyperbolic_curve() -> PowerDurationCurve:
    """
    Provide a curve generated from CP=250W, W'=20000J (floored watts).

    Includes short efforts outside the CP band.
    """
    return PowerDurationCurve.from_dict(
        {
            5: 1000,
            60: 500,
            120: 416,
            180: 361,
            300: 316,
            600: 283,
            1200: 266,
        }
    )


@pytest.fixture
def empty_curve() -> PowerDurationCurve:
    """Provide an empty curve."""
    return PowerDurationCurve()


# ============================================================================
# Data Fixtures - Training Load
# ============================================================================


@pytest.fixture
def balanced_load() -> DailyLoad:
    """Provide an optimally loaded rider in neutral form (ACWR 0.9, TSB +6)."""
    return DailyLoad(date=dt.date(2024, 3, 1), tss=0, atl=54.0, ctl=60.0, tsb=6.0)


@pytest.fixture
def prior_load() -> DailyLoad:
    """Provide a mid-season load snapshot."""
    return DailyLoad(date=dt.date(2024, 3, 1), tss=80, atl=70.0, ctl=60.0, tsb=-10.0)


# ============================================================================
# File Fixtures
# ============================================================================


@pytest.fixture
def stream_csv(tmp_path: Path, interval_ride: list[int]) -> Path:
    """Write the interval ride as a semicolon-separated stream file."""
    path = tmp_path / "stream.csv"
    lines = ["time;watts"] + [f"{i};{w}" for i, w in enumerate(interval_ride)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def curve_json(tmp_path: Path, hyperbolic_curve: PowerDurationCurve) -> Path:
    """Write the hyperbolic curve as a JSON file."""
    path = tmp_path / "curve.json"
    path.write_text(
        json.dumps({str(d): p for d, p in hyperbolic_curve.as_dict().items()}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def tss_csv(tmp_path: Path) -> Path:
    """Write a short TSS history with a rest day and a double day."""
    path = tmp_path / "tss.csv"
    path.write_text(
        "date;tss\n"
        "2024-01-01;100\n"
        "2024-01-03;50\n"
        "2024-01-03;30\n"
        "2024-01-04;\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def load_json(tmp_path: Path, prior_load: DailyLoad) -> Path:
    """Write the prior load snapshot as JSON."""
    path = tmp_path / "load.json"
    path.write_text(prior_load.model_dump_json(), encoding="utf-8")
    return path
