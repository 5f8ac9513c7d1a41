"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import ClassVar, Final

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from battrack.scheduling.models import validate_interval

# Load environment variables from .env file(s)
load_dotenv()

logger: Final = logging.getLogger(__name__)

DEFAULT_LOG_PATH: Final = Path(tempfile.gettempdir()) / "battery_data.csv"


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """User settings for sampling, the sample log and the chart window.

    Every field has a default, so the application runs without a config
    file. Values can be overridden in config.yaml.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/battrack/config.yaml").expanduser(),
        Path("/etc/battrack/config.yaml"),
    ]

    # Sample log shared by the recorder and the window
    log_path: Path = Field(DEFAULT_LOG_PATH, description="CSV sample log location")

    # Timing
    sample_interval_seconds: int = Field(
        60, description="Seconds between battery samples (60-3600, multiple of 60)"
    )
    refresh_interval_seconds: int = Field(
        60, description="Seconds between log reloads in the window (60-3600, multiple of 60)"
    )
    redraw_seconds: int = Field(5, gt=0, description="Seconds between window redraws")
    history_hours: int | None = Field(
        None, gt=0, description="Only chart records this many hours old or newer"
    )

    # Failure policy
    fail_on_write_error: bool = Field(
        False,
        description="Exit the recorder when the log cannot be written "
        "instead of continuing in memory",
    )

    # Display settings
    window_title: str = Field("Battery Life Tracker", description="Window and page title")
    chart_width: int = Field(960, gt=0, description="Chart width in pixels")
    chart_height: int = Field(540, gt=0, description="Chart height in pixels")
    time_format: str = Field(
        "%Y-%m-%d %H:%M:%S", description="Format for the last-sample timestamp"
    )

    # ---- validators ----
    @field_validator("sample_interval_seconds", "refresh_interval_seconds")
    @classmethod
    def check_interval(cls, v: int) -> int:
        return validate_interval(v)

    @field_validator("log_path")
    @classmethod
    def expand_log_path(cls, v: Path) -> Path:
        return v.expanduser()

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object; defaults when no file is found

        Raises:
            FileNotFoundError: If BATTRACK_CONFIG names a missing file
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            env_path = os.environ.get("BATTRACK_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from BATTRACK_CONFIG not found: {path}")
            else:
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    logger.debug("No configuration file found, using defaults")
                    return cls()

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw) or {}
        except Exception as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
