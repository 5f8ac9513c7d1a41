# filepath: src/battrack/controller.py
"""Application shell for the Battery Life Tracker."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Final

from battrack.common.enums import ShellState
from battrack.display.chart import ChartGeometry, build_chart, draw_chart
from battrack.display.raster import RasterChartSurface
from battrack.display.render import DashboardRenderer
from battrack.scheduling import PeriodicTask, Sampler
from battrack.scheduling.models import IntervalSetting
from battrack.settings.application import ApplicationSettings
from battrack.storage.history import HistoryLoader
from battrack.storage.recorder import Recorder
from battrack.system.battery import BatteryReader
from battrack.system.buffer import BufferSnapshot, SharedBuffer

logger: Final = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Configure root logging for the command-line entry points."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


@dataclass(frozen=True)
class Frame:
    """One redraw: the buffer contents and the chart computed from them."""

    snapshot: BufferSnapshot
    geometry: ChartGeometry


class BatteryTracker:
    """Main controller for the tracker window.

    Owns the shared buffer and the single background task feeding it:

    - by default, a history loader that rereads the sample log on the
      refresh interval;
    - with ``sample=True``, a sampler that reads the battery on the
      sampling interval, appends to the log and feeds the buffer
      directly (the log is loaded once at start to seed the buffer). The
      buffer keeps ``history_hours`` of samples, 24 when unset.

    Redraws are driven separately by the window, on a fixed timer,
    through :meth:`render_frame`.
    """

    def __init__(
        self,
        settings: ApplicationSettings,
        reader: BatteryReader | None = None,
        buffer: SharedBuffer | None = None,
        sample: bool = False,
    ) -> None:
        """Initialize the tracker.

        Args:
            settings: Application settings
            reader: Battery reader used in sampling mode
            buffer: Shared buffer (created if omitted)
            sample: Sample the battery in-process instead of only
                reading the log written by a separate recorder
        """
        self.state = ShellState.INITIALIZING
        self.settings = settings
        self.buffer = buffer or SharedBuffer(
            window=timedelta(hours=settings.user.history_hours or 24)
        )
        self.loader = HistoryLoader(
            settings.log_path, self.buffer, settings.user.history_hours
        )

        self.sampler: Sampler | None = None
        self.task: PeriodicTask
        if sample:
            self.sampler = Sampler(
                reader or BatteryReader(),
                settings.sample_interval,
                recorder=Recorder(settings.log_path),
                buffer=self.buffer,
                fail_on_error=settings.user.fail_on_write_error,
            )
            self.task = self.sampler.task
        else:
            self.task = PeriodicTask("history-loader", self.refresh, settings.refresh_interval)

    @property
    def interval(self) -> IntervalSetting:
        """Interval of the background task (adjustable from the window)."""
        return self.task.interval

    def refresh(self) -> bool:
        """Reload the sample log into the buffer."""
        self.state = ShellState.POLLING
        return self.loader.refresh()

    def start(self) -> None:
        """Spawn the background task."""
        if self.sampler is not None:
            self.refresh()
        self.task.start()
        self.state = ShellState.POLLING
        logger.info(
            "Tracking %s (%s every %s)",
            self.settings.log_path,
            "sampling" if self.sampler else "reloading",
            self.interval.describe(),
        )

    def stop(self, timeout: float | None = None) -> None:
        """Signal the background task to stop and wait for it."""
        self.task.stop()
        self.task.join(timeout)

    def render_frame(self) -> Frame:
        """Snapshot the buffer and compute the chart for one redraw."""
        self.state = ShellState.RENDERING
        snapshot = self.buffer.snapshot()
        return Frame(snapshot=snapshot, geometry=build_chart(snapshot.points))

    def render_raster(self, frame: Frame | None = None) -> RasterChartSurface:
        """Draw a frame into a Pillow surface sized from the settings."""
        frame = frame or self.render_frame()
        user = self.settings.user
        style = self.settings.style
        surface = RasterChartSurface(user.chart_width, user.chart_height, style.background)
        draw_chart(frame.geometry, surface, style)
        return surface

    def write_image(self, output_path: Path) -> Path:
        """Render the current chart to an image file."""
        self.render_raster().save(output_path)
        return output_path

    def write_html(self, output_path: Path) -> Path:
        """Render the current dashboard to an HTML file."""
        self.state = ShellState.RENDERING
        return DashboardRenderer(self.settings).write(self.buffer.snapshot(), output_path)
