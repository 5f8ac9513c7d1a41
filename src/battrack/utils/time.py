# src/battrack/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

import math
from datetime import datetime


class TimeUtils:
    """Time-related utility functions.

    Centralized utilities for working with dates and times:
    - Wall-clock time for samples (local, second precision)
    - Datetime formatting with user preferences
    - Fractional hour conversions for the chart axis
    """

    @staticmethod
    def now_local() -> datetime:
        """Get the current local wall-clock time, truncated to seconds.

        Returns:
            Naive local datetime without microseconds
        """
        return datetime.now().replace(microsecond=0)

    @staticmethod
    def format_datetime(dt: datetime, format_string: str) -> str:
        """Format datetime with specified format string.

        Args:
            dt: Datetime to format
            format_string: strftime format string

        Returns:
            Formatted datetime string
        """
        return dt.strftime(format_string)

    @staticmethod
    def hour_fraction(dt: datetime) -> float:
        """Hour of day with minutes as a fraction (9:30 → 9.5)."""
        return dt.hour + dt.minute / 60.0

    @staticmethod
    def split_hour_fraction(hour: float) -> tuple[int, int]:
        """Split a fractional hour into whole hours and rounded minutes.

        Minutes that round up to 60 roll over into the next hour, and the
        hour wraps at 24.

        Args:
            hour: Fractional hour, e.g. 13.5

        Returns:
            Tuple of (hour 0-23, minute 0-59)
        """
        whole = math.floor(hour)
        minute = round((hour - whole) * 60)
        if minute >= 60:
            whole += 1
            minute -= 60
        return whole % 24, minute
