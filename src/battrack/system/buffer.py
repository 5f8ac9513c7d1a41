"""Shared, lock-protected buffer between the background task and the UI."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Final

from battrack.models.sample import DeviceInfo, Sample, TimeSeriesPoint

DEFAULT_WINDOW: Final = timedelta(hours=24)


@dataclass(frozen=True)
class BufferSnapshot:
    """Immutable copy of the buffer contents at one instant."""

    points: tuple[TimeSeriesPoint, ...] = ()
    info: DeviceInfo | None = None
    warning: str | None = None
    updated_at: datetime | None = field(default=None, compare=False)


class SharedBuffer:
    """Single-writer, multi-reader container for the current time series.

    The writer computes a new value outside the lock and only takes the
    lock to swap it in; readers take an immutable snapshot. No I/O is ever
    performed while holding the lock.

    Samples added with :meth:`append` are kept for ``window``: each append
    drops every point stamped earlier than the newest sample minus the
    window, along with points whose time is unknown.
    """

    def __init__(self, window: timedelta = DEFAULT_WINDOW) -> None:
        self.window = window
        self._lock = threading.Lock()
        self._snapshot = BufferSnapshot()
        self._stamps: tuple[datetime | None, ...] = ()

    def replace(
        self,
        points: Iterable[TimeSeriesPoint],
        info: DeviceInfo | None,
        stamps: Iterable[datetime | None] | None = None,
    ) -> None:
        """Replace the series and device info wholesale.

        Args:
            points: New series in log order
            info: Device info of the last record
            stamps: Timestamp of each point, used to age points out on
                later appends (unknown when omitted)
        """
        new_points = tuple(points)
        new_stamps: tuple[datetime | None, ...] = (
            tuple(stamps) if stamps is not None else (None,) * len(new_points)
        )
        if len(new_stamps) != len(new_points):
            raise ValueError("stamps and points differ in length")
        with self._lock:
            self._stamps = new_stamps
            self._snapshot = BufferSnapshot(
                points=new_points,
                info=info,
                warning=self._snapshot.warning,
                updated_at=datetime.now(),
            )

    def append(self, sample: Sample) -> None:
        """Add one sample and age out points older than the window."""
        point = sample.to_point()
        info = sample.to_info()
        cutoff = sample.timestamp - self.window
        with self._lock:
            points, stamps = self._snapshot.points, self._stamps

        kept = [(p, ts) for p, ts in zip(points, stamps) if ts is not None and ts >= cutoff]
        kept.append((point, sample.timestamp))
        new_points = tuple(p for p, _ in kept)
        new_stamps = tuple(ts for _, ts in kept)

        with self._lock:
            self._stamps = new_stamps
            self._snapshot = BufferSnapshot(
                points=new_points,
                info=info,
                warning=self._snapshot.warning,
                updated_at=datetime.now(),
            )

    def set_warning(self, warning: str | None) -> None:
        """Set or clear the degraded-operation warning shown to the user."""
        with self._lock:
            current = self._snapshot
            self._snapshot = BufferSnapshot(
                points=current.points,
                info=current.info,
                warning=warning,
                updated_at=current.updated_at,
            )

    def snapshot(self) -> BufferSnapshot:
        """Return the current contents."""
        with self._lock:
            return self._snapshot
