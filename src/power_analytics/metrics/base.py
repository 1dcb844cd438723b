"""
Base class for analytics components.

Components receive their settings at construction and hold no other state
between calls.
"""

import logging

from ..settings import Settings


class BaseAnalyticsComponent:
    """
    Base class for analytics components.

    Provides the settings and a logger shared by every component.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize component with settings.

        Args:
            settings: Application settings; defaults are used when omitted
        """
        self.settings = settings or Settings()
        self.logger = logging.getLogger(self.__class__.__module__)
