from __future__ import annotations

from enum import Enum


class ChargeState(Enum):
    """Charging state reported by the battery.

    The values are the strings written to the sample log.
    """

    CHARGING = "charging"
    DISCHARGING = "discharging"
    FULL = "full"
    NOT_CHARGING = "not-charging"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, text: str | None) -> ChargeState:
        """Parse a state string from sysfs, psutil or an older log.

        Matching ignores case, spaces, underscores and hyphens, so
        "Not charging", "NotCharging" and "not-charging" are equivalent.
        Anything unrecognised is UNKNOWN.
        """
        if not text:
            return cls.UNKNOWN
        key = "".join(ch for ch in text.lower() if ch not in " _-")
        return _STATE_KEYS.get(key, cls.UNKNOWN)

    @property
    def label(self) -> str:
        """Human readable label, e.g. "Not charging"."""
        return self.value.replace("-", " ").capitalize()


_STATE_KEYS: dict[str, ChargeState] = {
    state.value.replace("-", ""): state for state in ChargeState
}


class ShellState(Enum):
    """Phases of the application shell.

    POLLING and RENDERING are not exclusive: the background refresh
    runs on its own timer while the window redraws on another.
    """

    INITIALIZING = "initializing"
    POLLING = "polling"
    RENDERING = "rendering"
