"""
Command-line interface for the Power Analytics package.

This module provides a thin command-line front end over the engine: processing
a ride against a stored curve, tracking training load from a TSS history,
recommending a workout and profiling a rider.
"""

import datetime as dt
import logging
from datetime import datetime
from pathlib import Path

import click

from .analysis import FtpEstimator, RiderProfileClassifier, WorkoutRecommender
from .data import DataLoaderProtocol, RideDataLoader
from .exceptions import AnalyticsUnavailableError, PowerAnalyticsError
from .metrics import (
    CriticalPowerFitter,
    PowerDurationCurve,
    TrainingLoadTracker,
    interval_name_from_seconds,
)
from .models import DailyLoad
from .orchestrator import AnalyticsOrchestrator
from .settings import load_settings


# Configure basic logging
def configure_logging(verbose: bool = False) -> None:
    """Configure logging with appropriate level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


@click.group()
def main():
    """
    Analyze cycling power data and derive physiological models.

    This tool turns per-second power streams into a power-duration curve,
    critical power and VO2max estimates, training load tracking and
    workout recommendations.
    """


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
@click.argument(
    "stream_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--curve",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to the rider's stored power curve (JSON)",
)
@click.option("--tss", type=float, help="TSS of the ride")
@click.option(
    "--prior-load",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to the last known daily load (JSON)",
)
@click.option(
    "--date",
    "ride_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Date of the ride (YYYY-MM-DD)",
)
@click.option("--weight", type=float, help="Body mass in kg (overrides config)")
@click.option(
    "--save-curve",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the updated power curve to this file (JSON)",
)
def ride(
    config: Path | None,
    verbose: bool,
    stream_csv: Path,
    curve: Path | None,
    tss: float | None,
    prior_load: Path | None,
    ride_date: datetime | None,
    weight: float | None,
    save_curve: Path | None,
) -> None:
    """
    Process a completed ride and print what changed.

    The ride's power stream is merged into the stored curve, and CP, VO2max
    and training load are recomputed where the ride warrants it.
    """
    configure_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(config)
        loader: DataLoaderProtocol = RideDataLoader(settings)

        samples = loader.load_power_samples(stream_csv)
        pdc = loader.load_curve(curve) if curve is not None else None
        prior = loader.load_daily_load(prior_load) if prior_load is not None else None

        orchestrator = AnalyticsOrchestrator(settings)
        result = orchestrator.run(
            samples,
            ride_tss=tss,
            pdc=pdc,
            prior_load=prior,
            ride_date=ride_date.date() if ride_date is not None else None,
            weight_kg=weight,
        )

        click.echo(result.model_dump_json(indent=2))

        if save_curve is not None:
            updated = pdc.copy() if pdc is not None else PowerDurationCurve()
            orchestrator.apply(updated, result)
            loader.save_curve(updated, save_curve)

    except PowerAnalyticsError as e:
        logger.error(f"Ride processing failed: {str(e)}")
        raise click.Abort() from e
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        raise click.Abort() from e


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
@click.argument("tss_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def load(config: Path | None, verbose: bool, tss_csv: Path) -> None:
    """
    Track training load from a daily TSS history.

    Prints the daily ATL/CTL/TSB/ACWR table followed by the current status.
    """
    configure_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(config)
        tracker = TrainingLoadTracker(settings)

        loader: DataLoaderProtocol = RideDataLoader(settings)
        daily_tss = loader.load_daily_tss(tss_csv)
        history = tracker.calculate_history(daily_tss)
        if not history:
            logger.warning("No TSS entries found")
            return

        frame = tracker.history_frame(history)
        click.echo(frame.round(2).to_string())

        current = history[-1]
        acwr = tracker.acwr(current.atl, current.ctl)

        click.echo("\nTraining Load Status")
        click.echo("-" * 20)
        click.echo(f"Date: {current.date}")
        click.echo(f"CTL: {current.ctl:.1f}")
        click.echo(f"ATL: {current.atl:.1f}")
        click.echo(f"TSB: {current.tsb:.1f}")
        click.echo(f"ACWR: {acwr.ratio:.2f}")
        click.echo(f"Status: {acwr.status.value}")
        click.echo(acwr.recommendation)

        if not tracker.has_sufficient_history(len(history)):
            click.echo(
                f"Note: only {len(history)} days of history; ACWR is not yet reliable"
            )

    except PowerAnalyticsError as e:
        logger.error(f"Training load calculation failed: {str(e)}")
        raise click.Abort() from e
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        raise click.Abort() from e


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
@click.option("--atl", type=float, required=True, help="Acute training load")
@click.option("--ctl", type=float, required=True, help="Chronic training load")
@click.option("--tsb", type=float, help="Training stress balance (default CTL - ATL)")
@click.option("--ftp", type=float, help="FTP in watts (overrides config)")
def recommend(
    config: Path | None,
    verbose: bool,
    atl: float,
    ctl: float,
    tsb: float | None,
    ftp: float | None,
) -> None:
    """Recommend the next workout for the given training status."""
    configure_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(config)
        recommender = WorkoutRecommender(ftp or settings.ftp, settings)

        current = DailyLoad(
            date=dt.date.today(),
            atl=atl,
            ctl=ctl,
            tsb=ctl - atl if tsb is None else tsb,
        )
        workout = recommender.recommend(current)

        high = (
            f"{workout.target_power_high}W"
            if workout.target_power_high is not None
            else "max"
        )
        click.echo(f"\nRecommended Workout: {workout.zone.value}")
        click.echo("=" * 40)
        click.echo(f"Duration: {workout.duration_min} min")
        click.echo(f"Expected TSS: {workout.expected_tss}")
        click.echo(f"Target Power: {workout.target_power_low}W - {high}")
        click.echo(f"Structure: {workout.structure}")
        click.echo(f"Why: {workout.rationale}")

    except PowerAnalyticsError as e:
        logger.error(f"Recommendation failed: {str(e)}")
        raise click.Abort() from e
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        raise click.Abort() from e


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
@click.argument(
    "curve_json", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option("--ftp", type=float, help="FTP in watts (default: estimated)")
def profile(
    config: Path | None, verbose: bool, curve_json: Path, ftp: float | None
) -> None:
    """
    Estimate FTP and classify the rider from a stored power curve.
    """
    configure_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(config)
        loader: DataLoaderProtocol = RideDataLoader(settings)
        pdc = loader.load_curve(curve_json)

        click.echo("\nPower Curve")
        click.echo("-" * 20)
        for duration, watts in pdc.as_dict().items():
            click.echo(f"{interval_name_from_seconds(duration)}: {watts}W")

        cp_model = None
        try:
            cp_model = CriticalPowerFitter(settings).fit(pdc)
            click.echo(
                f"\nCP: {cp_model.cp}W, W': {cp_model.w_prime}J "
                f"(r²={cp_model.r_squared:.3f})"
            )
        except AnalyticsUnavailableError as e:
            logger.info(f"No CP model: {e}")

        try:
            estimate = FtpEstimator(settings).estimate(pdc, cp_model)
            click.echo(
                f"Estimated FTP: {estimate.ftp_watts}W "
                f"({estimate.method.value}, {estimate.confidence.value} confidence)"
            )
            if ftp is None:
                ftp = estimate.ftp_watts
        except AnalyticsUnavailableError as e:
            logger.info(f"No FTP estimate: {e}")

        if ftp is None:
            ftp = settings.ftp
            logger.info(f"Using configured FTP {ftp}W for profiling")

        classifier = RiderProfileClassifier(ftp, settings)
        power_profile = classifier.profile_from_pdc(pdc)
        rider_type = classifier.classify(power_profile)

        click.echo(f"\nRider Type: {rider_type.value}")
        click.echo("=" * 40)
        click.echo(rider_type.description)
        click.echo(f"Training focus: {rider_type.training_focus}")
        click.echo(f"Suited events: {rider_type.suited_events}")
        for area, ratio in power_profile.ratios.items():
            value = f"{ratio:.2f}x FTP" if ratio is not None else "n/a"
            click.echo(f"{area}: {value}")
        strongest = power_profile.strongest_area()
        if strongest is not None:
            click.echo(f"Strongest: {strongest}")
            click.echo(f"Weakest: {power_profile.weakest_area()}")

    except PowerAnalyticsError as e:
        logger.error(f"Profiling failed: {str(e)}")
        raise click.Abort() from e
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        raise click.Abort() from e


if __name__ == "__main__":
    main()
