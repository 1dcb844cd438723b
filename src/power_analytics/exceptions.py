"""
Custom exceptions for the Power Analytics package.

This module defines all custom exceptions used throughout the application,
providing clear error hierarchies and specific error types for different scenarios.
"""


class PowerAnalyticsError(Exception):
    """Base exception for all Power Analytics errors."""


class ConfigurationError(PowerAnalyticsError):
    """Raised when there is an issue with configuration settings."""


class DataLoadError(PowerAnalyticsError):
    """Raised when there is an error loading data files."""


class InvalidInputError(PowerAnalyticsError):
    """Raised when a caller passes invalid values (negative watts, bad dates)."""


class AnalyticsUnavailableError(PowerAnalyticsError):
    """
    Base for expected, recoverable "not yet available" conditions.

    Callers treat these as a model that cannot be produced from the data at
    hand, never as a fatal error.
    """


class InsufficientDataError(AnalyticsUnavailableError):
    """Raised when there are not enough points or samples to produce a model."""


class InvalidModelError(InsufficientDataError):
    """Raised when a fit yields physiologically impossible parameters."""


class EmptyInputError(AnalyticsUnavailableError):
    """Raised when a zero-length sample sequence is passed to the extractor."""
