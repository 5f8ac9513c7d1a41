"""Host battery readers (Linux sysfs and psutil)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

import psutil

from battrack.common.enums import ChargeState
from battrack.errors import BatteryReadError
from battrack.models.sample import BatteryReading, sanitize_model
from battrack.types.battery import BatterySource, PsutilBatteryLike

logger: Final = logging.getLogger(__name__)

POWER_SUPPLY_ROOT: Final = Path("/sys/class/power_supply")

# sysfs reports energy in µWh, charge in µAh and voltage in µV
_MICRO: Final = 1_000_000.0


class SysfsBatterySource:
    """Linux battery reader using /sys/class/power_supply."""

    name = "sysfs"

    def __init__(self, root: Path = POWER_SUPPLY_ROOT) -> None:
        """Initialize with the power-supply class directory.

        Args:
            root: Directory holding one sub-directory per power supply
        """
        self.root = root

    def battery_dirs(self) -> list[Path]:
        """List battery supply directories, sorted by name."""
        if not self.root.is_dir():
            return []
        found: list[Path] = []
        for entry in sorted(self.root.iterdir()):
            if not entry.is_dir():
                continue
            supply_type = self._read_text(entry / "type")
            if supply_type == "Battery" or (supply_type is None and entry.name.startswith("BAT")):
                found.append(entry)
        return found

    def read_first(self) -> BatteryReading | None:
        """Read the first battery found under the sysfs root.

        Returns:
            A reading, or None if no battery directory exists

        Raises:
            BatteryReadError: If the battery exposes no usable charge level
        """
        batteries = self.battery_dirs()
        if not batteries:
            return None
        return self._read_battery(batteries[0])

    def _read_battery(self, base: Path) -> BatteryReading:
        voltage_uv = self._read_int(base / "voltage_now")
        design_uv = self._read_int(base / "voltage_min_design") or voltage_uv

        energy_full = self._read_energy(base, "full", design_uv)
        energy_full_design = self._read_energy(base, "full_design", design_uv)
        energy = self._read_energy(base, "now", design_uv)

        if energy is not None and energy_full:
            state_of_charge = energy / energy_full
        else:
            capacity = self._read_int(base / "capacity")
            if capacity is None:
                raise BatteryReadError(self.name, f"{base.name} reports no charge level")
            state_of_charge = capacity / 100.0

        cycle_count = self._read_int(base / "cycle_count")
        return BatteryReading(
            state_of_charge=state_of_charge,
            state=ChargeState.parse(self._read_text(base / "status")),
            model=sanitize_model(self._read_text(base / "model_name")),
            cycle_count=cycle_count if cycle_count is None or cycle_count >= 0 else None,
            energy_full=energy_full or 0.0,
            energy_full_design=energy_full_design or 0.0,
            energy=energy or 0.0,
            voltage=(voltage_uv or 0) / _MICRO,
        )

    def _read_energy(self, base: Path, suffix: str, voltage_uv: int | None) -> float | None:
        """Return energy in Wh, deriving it from charge when needed."""
        energy_uwh = self._read_int(base / f"energy_{suffix}")
        if energy_uwh is not None:
            return energy_uwh / _MICRO
        charge_uah = self._read_int(base / f"charge_{suffix}")
        if charge_uah is not None and voltage_uv:
            return charge_uah * voltage_uv / (_MICRO * _MICRO)
        return None

    @staticmethod
    def _read_text(path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError:
            return None

    @classmethod
    def _read_int(cls, path: Path) -> int | None:
        text = cls._read_text(path)
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            return None


class PsutilBatterySource:
    """Cross-platform battery reader using ``psutil.sensors_battery``.

    psutil only reports the charge level and whether the charger is
    plugged in, so energy, voltage and model are left empty.
    """

    name = "psutil"

    def read_first(self) -> BatteryReading | None:
        """Read the battery psutil reports, if any.

        Raises:
            BatteryReadError: If psutil cannot query the battery
        """
        try:
            battery: PsutilBatteryLike | None = psutil.sensors_battery()
        except Exception as exc:
            raise BatteryReadError(self.name, str(exc)) from exc

        if battery is None:
            return None
        return BatteryReading(
            state_of_charge=float(battery.percent) / 100.0,
            state=self._state(battery),
        )

    @staticmethod
    def _state(battery: PsutilBatteryLike) -> ChargeState:
        if battery.power_plugged is None:
            return ChargeState.UNKNOWN
        if not battery.power_plugged:
            return ChargeState.DISCHARGING
        if battery.percent >= 100:
            return ChargeState.FULL
        return ChargeState.CHARGING


class BatteryReader:
    """Reads the first available battery from a list of sources.

    Sources are tried in order until one returns a reading. Source errors
    are logged and absorbed: a failed read is simply "no sample this tick".
    """

    def __init__(self, sources: list[BatterySource] | None = None) -> None:
        """Initialize with battery sources.

        Args:
            sources: Sources to try in order (default: sysfs, then psutil)
        """
        self.sources: list[BatterySource] = (
            sources if sources is not None else [SysfsBatterySource(), PsutilBatterySource()]
        )
        self._missing = False

    def read(self) -> BatteryReading | None:
        """Return the first battery reading any source produces, or None."""
        for source in self.sources:
            try:
                reading = source.read_first()
            except BatteryReadError as exc:
                logger.warning("Battery read failed: %s", exc)
                continue
            except Exception as exc:
                logger.warning("Unexpected error from %s battery source: %s", source.name, exc)
                continue

            if reading is not None:
                if self._missing:
                    logger.info("Battery detected via %s", source.name)
                self._missing = False
                return reading

        if not self._missing:
            logger.warning("No battery found; skipping samples until one appears")
        self._missing = True
        return None
