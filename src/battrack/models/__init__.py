"""Data models for battrack."""

from battrack.models.sample import BatteryReading, DeviceInfo, Sample, TimeSeriesPoint

__all__ = ["BatteryReading", "DeviceInfo", "Sample", "TimeSeriesPoint"]
