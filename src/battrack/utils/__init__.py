"""Common utility functions and helpers for the battrack package."""

from battrack.utils.file import ensure_parent_directory, is_empty_or_missing
from battrack.utils.formatting import format_optional
from battrack.utils.time import TimeUtils

__all__ = [
    "TimeUtils",
    "ensure_parent_directory",
    "format_optional",
    "is_empty_or_missing",
]
