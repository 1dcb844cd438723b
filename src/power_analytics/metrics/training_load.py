"""
Training load tracking.

This module maintains the daily Acute Training Load (ATL, fatigue), Chronic
Training Load (CTL, fitness) and Training Stress Balance (TSB, form) as
exponentially weighted averages of daily TSS, and classifies the
Acute:Chronic Workload Ratio (ACWR).
"""

import datetime as dt
import logging
from collections.abc import Iterable

import pandas as pd

from ..constants import TrainingLoadWindows, TrainingStatusThresholds
from ..exceptions import InvalidInputError
from ..models import AcwrResult, AcwrStatus, DailyLoad
from ..settings import Settings
from .base import BaseAnalyticsComponent

logger = logging.getLogger(__name__)


def classify_acwr(ratio: float) -> AcwrStatus:
    """Map an ACWR value onto its injury-risk band."""
    if ratio < TrainingStatusThresholds.ACWR_LOW_TRAINING:
        return AcwrStatus.UNDERTRAINED
    if ratio <= TrainingStatusThresholds.ACWR_OPTIMAL_MAX:
        return AcwrStatus.OPTIMAL
    if ratio <= TrainingStatusThresholds.ACWR_HIGH_RISK:
        return AcwrStatus.CAUTION
    return AcwrStatus.HIGH_RISK


class TrainingLoadTracker(BaseAnalyticsComponent):
    """
    Calculates daily ATL/CTL/TSB and the ACWR.

    Each day moves the averages toward that day's TSS by 1/τ of the
    distance, with τ the ATL or CTL window in days.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        atl_days: int | None = None,
        ctl_days: int | None = None,
    ):
        """
        Initialize the tracker.

        Args:
            settings: Application settings
            atl_days: Acute time constant in days
            ctl_days: Chronic time constant in days
        """
        super().__init__(settings)
        self.atl_days = self.settings.atl_days if atl_days is None else atl_days
        self.ctl_days = self.settings.ctl_days if ctl_days is None else ctl_days
        if self.atl_days <= 0 or self.ctl_days <= 0:
            raise InvalidInputError("Training load windows must be positive")

    def calculate_day(
        self, prev: DailyLoad | None, tss: float | None, on_date: dt.date
    ) -> DailyLoad:
        """
        Compute one day's training load from the previous day's state.

        Args:
            prev: Previous day's load, or None for a cold start
            tss: TSS for the day (None means no ride)
            on_date: Calendar day being computed

        Returns:
            The new DailyLoad
        """
        tss = 0.0 if tss is None else float(tss)
        if tss < 0:
            raise InvalidInputError(f"TSS must be non-negative, got {tss}")

        atl = prev.atl if prev is not None else 0.0
        ctl = prev.ctl if prev is not None else 0.0
        atl += (tss - atl) / self.atl_days
        ctl += (tss - ctl) / self.ctl_days

        return DailyLoad(date=on_date, tss=tss, atl=atl, ctl=ctl, tsb=ctl - atl)

    def advance(
        self,
        prev: DailyLoad | None,
        tss: float | None,
        on_date: dt.date | None = None,
    ) -> DailyLoad:
        """
        Move the load state forward to a ride's date.

        Days skipped between ``prev`` and ``on_date`` decay with zero TSS.

        Args:
            prev: Last known load, or None for a cold start
            tss: TSS recorded on ``on_date``
            on_date: Day of the ride (defaults to the day after ``prev``, or
                today on a cold start)

        Returns:
            DailyLoad for ``on_date``

        Raises:
            InvalidInputError: If ``on_date`` is not after ``prev.date``
        """
        if prev is None:
            return self.calculate_day(None, tss, on_date or dt.date.today())

        if on_date is None:
            on_date = prev.date + dt.timedelta(days=1)
        if on_date <= prev.date:
            raise InvalidInputError(
                f"Cannot advance training load from {prev.date} to {on_date}"
            )

        state = prev
        day = prev.date + dt.timedelta(days=1)
        while day < on_date:
            state = self.calculate_day(state, 0.0, day)
            day += dt.timedelta(days=1)
        return self.calculate_day(state, tss, on_date)

    def acwr(self, atl: float, ctl: float) -> AcwrResult:
        """
        Calculate the Acute:Chronic Workload Ratio.

        Args:
            atl: Acute training load
            ctl: Chronic training load

        Returns:
            AcwrResult; the ratio is 0 when CTL is 0
        """
        ratio = atl / ctl if ctl > 0 else 0.0
        return AcwrResult(ratio=max(ratio, 0.0), status=classify_acwr(ratio))

    def calculate_history(
        self, daily_tss: Iterable[tuple[dt.date, float | None]]
    ) -> list[DailyLoad]:
        """
        Compute a gap-free daily load history from dated TSS values.

        Entries may arrive in any order; several entries on the same date are
        summed and every calendar day between the first and last date is
        emitted.

        Args:
            daily_tss: (date, tss) pairs; a None TSS counts as 0

        Returns:
            One DailyLoad per day in ascending date order
        """
        df = pd.DataFrame(list(daily_tss), columns=["date", "tss"])
        if df.empty:
            return []

        df["date"] = pd.to_datetime(df["date"]).dt.normalize()
        df["tss"] = pd.to_numeric(df["tss"], errors="coerce").fillna(0.0)
        if (df["tss"] < 0).any():
            raise InvalidInputError("TSS values must be non-negative")

        daily = df.groupby("date")["tss"].sum()
        full_range = pd.date_range(daily.index.min(), daily.index.max(), freq="D")
        daily = daily.reindex(full_range, fill_value=0.0)

        # Seed with a zero day so the first real day starts from a cold load
        seeded = pd.Series([0.0, *daily.to_numpy()])
        atl = seeded.ewm(alpha=1 / self.atl_days, adjust=False).mean().iloc[1:]
        ctl = seeded.ewm(alpha=1 / self.ctl_days, adjust=False).mean().iloc[1:]

        history = [
            DailyLoad(
                date=timestamp.date(),
                tss=float(tss),
                atl=float(a),
                ctl=float(c),
                tsb=float(c - a),
            )
            for timestamp, tss, a, c in zip(
                daily.index, daily.to_numpy(), atl.to_numpy(), ctl.to_numpy()
            )
        ]

        self.logger.info(
            f"Calculated training load for {len(history)} days "
            f"({history[0].date} to {history[-1].date})"
        )
        return history

    def has_sufficient_history(self, days: int) -> bool:
        """Whether enough days have been tracked for the ACWR to be meaningful."""
        return days >= TrainingLoadWindows.MIN_HISTORY_DAYS

    def history_frame(self, history: list[DailyLoad]) -> pd.DataFrame:
        """
        Tabulate a load history.

        Returns:
            DataFrame indexed by date with tss, atl, ctl, tsb, acwr and
            acwr_status columns
        """
        columns = ["tss", "atl", "ctl", "tsb", "acwr", "acwr_status"]
        if not history:
            return pd.DataFrame(columns=columns)

        rows = []
        for load in history:
            result = self.acwr(load.atl, load.ctl)
            rows.append(
                {
                    "date": pd.Timestamp(load.date),
                    "tss": load.tss,
                    "atl": load.atl,
                    "ctl": load.ctl,
                    "tsb": load.tsb,
                    "acwr": result.ratio,
                    "acwr_status": result.status.value,
                }
            )
        return pd.DataFrame(rows).set_index("date")[columns]
