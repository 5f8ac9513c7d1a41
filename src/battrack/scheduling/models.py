"""Data models for sampling and refresh intervals."""

from __future__ import annotations

import threading
from typing import Final

MIN_INTERVAL_SECONDS: Final = 60
MAX_INTERVAL_SECONDS: Final = 3600
INTERVAL_STEP_SECONDS: Final = 60


def validate_interval(seconds: int) -> int:
    """Check that an interval lies on the 60..3600 s grid in 60 s steps.

    Raises:
        ValueError: If the interval is out of range or not a whole minute
    """
    if not MIN_INTERVAL_SECONDS <= seconds <= MAX_INTERVAL_SECONDS:
        raise ValueError(
            f"interval must be between {MIN_INTERVAL_SECONDS} and "
            f"{MAX_INTERVAL_SECONDS} seconds, got {seconds}"
        )
    if seconds % INTERVAL_STEP_SECONDS:
        raise ValueError(f"interval must be a multiple of {INTERVAL_STEP_SECONDS} seconds")
    return seconds


def format_period(seconds: int) -> str:
    """Describe an interval for the period slider.

    Args:
        seconds: Interval in seconds

    Returns:
        "N min" below one hour, "X.X hrs" from one hour upward
    """
    hours = seconds / 3600
    if hours < 1.0:
        return f"{seconds // 60} min"
    return f"{hours:.1f} hrs"


class IntervalSetting:
    """Operator-adjustable interval shared between threads.

    The owner of a timer reads the value right before each sleep, so a
    change takes effect on the next sleep rather than the current one.
    """

    def __init__(self, seconds: int = MIN_INTERVAL_SECONDS) -> None:
        self._lock = threading.Lock()
        self._seconds = validate_interval(seconds)

    def get(self) -> int:
        """Return the interval in seconds."""
        with self._lock:
            return self._seconds

    def set(self, seconds: int) -> None:
        """Change the interval.

        Raises:
            ValueError: If the interval is outside the allowed grid
        """
        seconds = validate_interval(int(seconds))
        with self._lock:
            self._seconds = seconds

    def describe(self) -> str:
        """Human readable form of the current interval."""
        return format_period(self.get())
