"""Text and number formatting utilities for the info panel."""

from __future__ import annotations


def format_optional(value: float | int | None, unit: str = "", precision: int = 2) -> str:
    """Format a possibly missing measurement.

    Args:
        value: Value to format, or None if unknown
        unit: Unit suffix, e.g. "Wh"
        precision: Decimal places for floats

    Returns:
        Formatted string, or "n/a" when the value is missing
    """
    if value is None:
        return "n/a"
    text = str(value) if isinstance(value, int) else f"{value:.{precision}f}"
    return f"{text} {unit}".rstrip()
