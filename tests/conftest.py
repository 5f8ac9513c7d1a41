from datetime import datetime
from pathlib import Path

import pytest

from battrack.common.enums import ChargeState
from battrack.models.sample import BatteryReading, Sample
from battrack.settings import ApplicationSettings, UserSettings
from battrack.storage.records import HEADER


class FakeSource:
    """Battery source returning a fixed reading (or raising)."""

    name = "fake"

    def __init__(self, reading: BatteryReading | None = None, error: Exception | None = None):
        self.reading = reading
        self.error = error
        self.calls = 0

    def read_first(self) -> BatteryReading | None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.reading


class FakeReader:
    """Stand-in for BatteryReader."""

    def __init__(self, reading: BatteryReading | None = None) -> None:
        self.reading = reading

    def read(self) -> BatteryReading | None:
        return self.reading


def make_sample(
    when: datetime = datetime(2025, 5, 3, 9, 30, 15),
    percentage: float = 55.0,
    **overrides: object,
) -> Sample:
    fields: dict[str, object] = {
        "timestamp": when,
        "percentage": percentage,
        "model": "5XJ28",
        "state": ChargeState.DISCHARGING,
        "cycle_count": 212,
        "energy_full": 48.1,
        "energy_full_design": 51.0,
        "energy": 26.45,
        "voltage": 11.9,
    }
    fields.update(overrides)
    return Sample(**fields)  # type: ignore[arg-type]


def write_log(path: Path, *lines: str) -> Path:
    path.write_text("\n".join((HEADER,) + lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def reading() -> BatteryReading:
    return BatteryReading(
        state_of_charge=0.5,
        state=ChargeState.CHARGING,
        model="DELL 5XJ28",
        cycle_count=212,
        energy_full=48.1,
        energy_full_design=51.0,
        energy=24.05,
        voltage=12.1,
    )


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "battery_data.csv"


@pytest.fixture
def settings(log_path: Path) -> ApplicationSettings:
    return ApplicationSettings(UserSettings(log_path=log_path, chart_width=480, chart_height=270))
