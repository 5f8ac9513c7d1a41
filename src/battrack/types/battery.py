"""Type definitions for battery hardware interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from battrack.models.sample import BatteryReading


@runtime_checkable
class BatterySource(Protocol):
    """Protocol for host battery subsystems."""

    name: str

    def read_first(self) -> BatteryReading | None:
        """Read the first battery the subsystem enumerates.

        Returns:
            A reading, or None if the subsystem reports no battery

        Raises:
            BatteryReadError: If the subsystem query fails
        """
        ...


@runtime_checkable
class PsutilBatteryLike(Protocol):
    """Shape of the named tuple returned by ``psutil.sensors_battery()``."""

    percent: float
    secsleft: int
    power_plugged: bool | None
