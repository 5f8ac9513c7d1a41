"""Battery observation models.

A ``BatteryReading`` is what a battery source returns; a ``Sample`` is a
reading stamped with the wall-clock time at which it was taken, and is
the unit written to the log. ``TimeSeriesPoint`` and ``DeviceInfo`` are
the two projections the history loader rebuilds from the log.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple

from pydantic import BaseModel, Field, field_validator

from battrack.common.enums import ChargeState
from battrack.utils.time import TimeUtils


def sanitize_model(value: str | None) -> str:
    """Replace the log delimiter in free text with spaces."""
    return (value or "").replace(",", " ").strip()


@dataclass(frozen=True)
class BatteryReading:
    """Instantaneous attributes of one battery."""

    state_of_charge: float
    state: ChargeState = ChargeState.UNKNOWN
    model: str = ""
    cycle_count: int | None = None
    energy_full: float = 0.0
    energy_full_design: float = 0.0
    energy: float = 0.0
    voltage: float = 0.0

    @property
    def percentage(self) -> float:
        """State of charge as a percentage (not clamped)."""
        return self.state_of_charge * 100.0


class Sample(BaseModel):
    """One timestamped battery observation."""

    timestamp: datetime
    percentage: float
    model: str = ""
    state: ChargeState = ChargeState.UNKNOWN
    cycle_count: int | None = Field(None, ge=0)
    energy_full: float = Field(0.0, ge=0)
    energy_full_design: float = Field(0.0, ge=0)
    energy: float = Field(0.0, ge=0)
    voltage: float = Field(0.0, ge=0)

    @field_validator("timestamp")
    @classmethod
    def truncate_to_seconds(cls, v: datetime) -> datetime:
        return v.replace(microsecond=0)

    @field_validator("model", mode="before")
    @classmethod
    def strip_delimiters(cls, v: str | None) -> str:
        return sanitize_model(v)

    @classmethod
    def from_reading(cls, reading: BatteryReading, timestamp: datetime) -> Sample:
        """Build a sample from a battery reading taken at ``timestamp``."""
        return cls(
            timestamp=timestamp,
            percentage=reading.percentage,
            model=reading.model,
            state=reading.state,
            cycle_count=reading.cycle_count,
            energy_full=reading.energy_full,
            energy_full_design=reading.energy_full_design,
            energy=reading.energy,
            voltage=reading.voltage,
        )

    @property
    def hour_fraction(self) -> float:
        """Hour of day including minutes, e.g. 9:30 → 9.5."""
        return TimeUtils.hour_fraction(self.timestamp)

    def to_point(self) -> TimeSeriesPoint:
        """Project the sample onto the chart axes."""
        return TimeSeriesPoint(self.hour_fraction, self.percentage)

    def to_info(self) -> DeviceInfo:
        """Descriptive fields of this sample."""
        return DeviceInfo(
            model=self.model,
            state=self.state,
            cycle_count=self.cycle_count,
            energy_full=self.energy_full,
            energy_full_design=self.energy_full_design,
            energy=self.energy,
            voltage=self.voltage,
            timestamp=self.timestamp,
        )


class TimeSeriesPoint(NamedTuple):
    """A (fractional hour, percentage) pair used for plotting."""

    x: float
    y: float


@dataclass(frozen=True)
class DeviceInfo:
    """Descriptive battery attributes from the most recent record.

    Numeric fields are None when the log value could not be parsed, so a
    genuine zero can be told apart from a missing value.
    """

    model: str = ""
    state: ChargeState = ChargeState.UNKNOWN
    cycle_count: int | None = None
    energy_full: float | None = None
    energy_full_design: float | None = None
    energy: float | None = None
    voltage: float | None = None
    timestamp: datetime | None = None

    @property
    def health(self) -> float | None:
        """Full-charge capacity relative to design, in percent."""
        if not self.energy_full or not self.energy_full_design:
            return None
        return self.energy_full / self.energy_full_design * 100.0
