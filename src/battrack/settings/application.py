"""Internal application settings derived from user settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from battrack.scheduling.models import IntervalSetting
from battrack.settings.user import UserSettings

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class ChartStyle:
    """Colors and line widths for the chart and its surroundings."""

    background: RGB = (24, 24, 32)
    line: RGB = (120, 150, 255)
    area: RGBA = (120, 150, 255, 120)
    text: RGB = (160, 160, 160)
    heading: RGB = (211, 211, 211)
    warning: RGB = (230, 120, 90)
    line_width: float = 3.0


class ApplicationSettings:
    """Application settings container.

    Combines the user configuration with fixed application defaults and
    holds the runtime-adjustable intervals shared between the window and
    the background tasks.

    Examples:
        user_settings = UserSettings.load()
        app_settings = ApplicationSettings(user_settings)
        app_settings.sample_interval.set(600)
    """

    def __init__(
        self,
        user_settings: UserSettings,
        style: ChartStyle | None = None,
    ):
        """Initialize application settings with configuration sources."""
        self.user = user_settings
        self.style = style or ChartStyle()
        self.sample_interval = IntervalSetting(user_settings.sample_interval_seconds)
        self.refresh_interval = IntervalSetting(user_settings.refresh_interval_seconds)

    @property
    def log_path(self) -> Path:
        """Location of the sample log."""
        return self.user.log_path
