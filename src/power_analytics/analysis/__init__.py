"""
Analysis and coaching layer.

This package contains modules that interpret the fitted models: FTP
estimation, rider profiling and workout recommendation.
"""

from .rider_profile import RiderProfileClassifier
from .threshold_estimator import FtpEstimator
from .workout_recommender import WorkoutRecommender, zone_ftp_range

__all__ = [
    "FtpEstimator",
    "RiderProfileClassifier",
    "WorkoutRecommender",
    "zone_ftp_range",
]
