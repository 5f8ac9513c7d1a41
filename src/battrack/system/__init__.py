# src/battrack/system/__init__.py
"""System module for battery hardware access and shared state."""

# Re-export commonly used classes for cleaner imports
from battrack.system.battery import BatteryReader, PsutilBatterySource, SysfsBatterySource
from battrack.system.buffer import BufferSnapshot, SharedBuffer

# Define the public API
__all__ = [
    "BatteryReader",
    "BufferSnapshot",
    "PsutilBatterySource",
    "SharedBuffer",
    "SysfsBatterySource",
]
