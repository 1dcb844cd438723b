"""
Data access layer.

This package contains the file adapters that feed the engine.
"""

from .loader import DataLoaderProtocol, RideDataLoader

__all__ = [
    "DataLoaderProtocol",
    "RideDataLoader",
]
