"""Exception classes for battery tracking.

This module defines the small hierarchy of errors raised while reading
the host battery and writing the sample log.
"""

from __future__ import annotations

from pathlib import Path


class BatteryTrackerError(Exception):
    """Base class for all battery tracker errors."""


class BatteryReadError(BatteryTrackerError):
    """A battery source failed to produce a reading.

    Raised by individual battery sources; the reader absorbs it and
    treats the tick as "no sample".
    """

    def __init__(self, source: str, message: str) -> None:
        """Initialize the exception.

        Args:
            source: Name of the battery source that failed
            message: Human-readable error message
        """
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class RecorderError(BatteryTrackerError):
    """The sample log could not be created or appended to."""

    def __init__(self, path: Path, message: str) -> None:
        """Initialize the exception.

        Args:
            path: Path of the log file
            message: Human-readable error message
        """
        super().__init__(f"Cannot write {path}: {message}")
        self.path = path
        self.message = message
