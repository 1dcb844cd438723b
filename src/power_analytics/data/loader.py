"""
Data loading functionality.

This module provides a clean interface for feeding the engine from files:
per-second power streams and daily TSS as CSV, curves and load state as JSON.
"""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import numpy as np
import pandas as pd
from pydantic import ValidationError

from ..constants import CSVConstants
from ..exceptions import DataLoadError
from ..metrics.power_curve import PowerDurationCurve
from ..models import DailyLoad
from ..settings import Settings

logger = logging.getLogger(__name__)


@runtime_checkable
class DataLoaderProtocol(Protocol):
    """Protocol for data loaders used by the command line."""

    def load_power_samples(self, path: Path) -> np.ndarray:
        """Load per-second power samples for one ride."""
        ...

    def load_daily_tss(self, path: Path) -> list[tuple]:
        """Load dated TSS values."""
        ...

    def load_curve(self, path: Path) -> PowerDurationCurve:
        """Load a stored power-duration curve."""
        ...

    def load_daily_load(self, path: Path) -> DailyLoad:
        """Load the last known daily load."""
        ...

    def save_curve(self, curve: PowerDurationCurve, path: Path) -> None:
        """Persist a power-duration curve."""
        ...


class RideDataLoader:
    """
    Handles loading of ride and profile data from files.

    This class encapsulates all file I/O, so the engine itself only ever sees
    in-memory values.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize the data loader.

        Args:
            settings: Application settings
        """
        self.settings = settings or Settings()
        self.logger = logging.getLogger(__name__)

    def load_power_samples(self, path: Path) -> np.ndarray:
        """
        Load a per-second power stream from CSV.

        Missing readings are treated as zero power.

        Returns:
            int64 array of watts

        Raises:
            DataLoadError: If loading fails
        """
        try:
            df = self._read_csv(path)
            if CSVConstants.POWER_COLUMN not in df.columns:
                raise DataLoadError(
                    f"Column '{CSVConstants.POWER_COLUMN}' not found in {path}"
                )
            watts = pd.to_numeric(df[CSVConstants.POWER_COLUMN], errors="coerce")
            samples = watts.fillna(0).round().astype("int64").to_numpy()
            self.logger.debug(f"Loaded {len(samples)} power samples from {path}")
            return samples

        except DataLoadError:
            raise
        except Exception as e:
            raise DataLoadError(f"Failed to load power stream {path}: {e}") from e

    def load_daily_tss(self, path: Path) -> list[tuple]:
        """
        Load dated TSS values from CSV.

        Returns:
            (date, tss) pairs in file order; blank TSS values become None

        Raises:
            DataLoadError: If loading fails
        """
        try:
            df = self._read_csv(path)
            missing = {CSVConstants.DATE_COLUMN, CSVConstants.TSS_COLUMN} - set(
                df.columns
            )
            if missing:
                raise DataLoadError(f"Columns {sorted(missing)} not found in {path}")

            dates = pd.to_datetime(df[CSVConstants.DATE_COLUMN]).dt.date
            tss = pd.to_numeric(df[CSVConstants.TSS_COLUMN], errors="coerce")
            pairs = [
                (day, None if pd.isna(value) else float(value))
                for day, value in zip(dates, tss, strict=True)
            ]
            self.logger.info(f"Loaded {len(pairs)} TSS entries from {path}")
            return pairs

        except DataLoadError:
            raise
        except Exception as e:
            raise DataLoadError(f"Failed to load TSS history {path}: {e}") from e

    def load_curve(self, path: Path) -> PowerDurationCurve:
        """
        Load a power-duration curve from a JSON {"<seconds>": <watts>} object.

        Raises:
            DataLoadError: If loading fails
        """
        try:
            raw = self._read_json(path)
            if not isinstance(raw, dict):
                raise DataLoadError(f"Curve file {path} must contain a JSON object")
            curve = PowerDurationCurve.from_dict(
                {int(duration): int(watts) for duration, watts in raw.items()}
            )
            self.logger.debug(f"Loaded curve with {len(curve)} points from {path}")
            return curve

        except DataLoadError:
            raise
        except Exception as e:
            raise DataLoadError(f"Failed to load curve {path}: {e}") from e

    def load_daily_load(self, path: Path) -> DailyLoad:
        """
        Load a DailyLoad snapshot from JSON.

        Raises:
            DataLoadError: If loading fails
        """
        try:
            return DailyLoad.model_validate(self._read_json(path))
        except ValidationError as e:
            raise DataLoadError(f"Invalid daily load in {path}: {e}") from e

    def save_curve(self, curve: PowerDurationCurve, path: Path) -> None:
        """Write a curve as a JSON {"<seconds>": <watts>} object."""
        try:
            path.write_text(
                json.dumps({str(d): p for d, p in curve.as_dict().items()}, indent=2),
                encoding=CSVConstants.DEFAULT_ENCODING,
            )
            self.logger.info(f"Saved curve with {len(curve)} points to {path}")
        except OSError as e:
            raise DataLoadError(f"Failed to save curve {path}: {e}") from e

    def _read_csv(self, path: Path) -> pd.DataFrame:
        if not path.exists():
            raise DataLoadError(f"File not found: {path}")
        return pd.read_csv(
            path,
            sep=CSVConstants.DEFAULT_SEPARATOR,
            encoding=CSVConstants.DEFAULT_ENCODING,
        )

    def _read_json(self, path: Path):
        if not path.exists():
            raise DataLoadError(f"File not found: {path}")
        try:
            return json.loads(path.read_text(encoding=CSVConstants.DEFAULT_ENCODING))
        except (OSError, json.JSONDecodeError) as e:
            raise DataLoadError(f"Failed to read {path}: {e}") from e
