"""Application settings management.

This package provides:
- UserSettings: User-configurable settings loaded from config.yaml
- ApplicationSettings: Internal application settings and defaults
"""

from battrack.settings.application import ApplicationSettings, ChartStyle
from battrack.settings.user import UserSettings

__all__ = ["ApplicationSettings", "ChartStyle", "UserSettings"]
