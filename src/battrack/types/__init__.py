"""Type definitions for battrack."""

from battrack.types.battery import BatterySource, PsutilBatteryLike

__all__ = ["BatterySource", "PsutilBatteryLike"]
