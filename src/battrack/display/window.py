"""Desktop window showing the battery chart."""

from __future__ import annotations

import logging
import tkinter as tk
from typing import Final

from PIL import ImageTk

from battrack.controller import BatteryTracker
from battrack.display.render import device_rows
from battrack.scheduling.models import (
    INTERVAL_STEP_SECONDS,
    MAX_INTERVAL_SECONDS,
    MIN_INTERVAL_SECONDS,
    format_period,
)
from battrack.settings.application import RGB

logger: Final = logging.getLogger(__name__)


def _hex(color: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


class TrackerWindow:
    """Tk window: period slider, device info, warning line and chart image.

    The chart is redrawn from the tracker's buffer every
    ``redraw_seconds`` regardless of whether new data arrived.
    """

    def __init__(self, tracker: BatteryTracker, root: tk.Tk | None = None) -> None:
        self.tracker = tracker
        self.settings = tracker.settings
        self.root = root or tk.Tk()
        self._photo: ImageTk.PhotoImage | None = None
        self._after_id: str | None = None
        self._build()

    def _build(self) -> None:
        style = self.settings.style
        bg = _hex(style.background)
        fg = _hex(style.text)

        self.root.title(self.settings.user.window_title)
        self.root.configure(bg=bg)

        tk.Label(
            self.root,
            text=self.settings.user.window_title,
            bg=bg,
            fg=_hex(style.heading),
            font=("TkDefaultFont", 16),
        ).pack(anchor="w", padx=12, pady=(12, 4))

        period_row = tk.Frame(self.root, bg=bg)
        period_row.pack(fill=tk.X, padx=12)
        self.period_var = tk.StringVar()
        tk.Label(period_row, textvariable=self.period_var, bg=bg, fg=fg).pack(side=tk.LEFT)
        self.period_scale = tk.Scale(
            period_row,
            from_=MIN_INTERVAL_SECONDS,
            to=MAX_INTERVAL_SECONDS,
            resolution=INTERVAL_STEP_SECONDS,
            orient=tk.HORIZONTAL,
            showvalue=False,
            length=300,
            bg=bg,
            fg=fg,
            highlightthickness=0,
            command=self._on_period_change,
        )
        self.period_scale.set(self.tracker.interval.get())
        self.period_scale.pack(side=tk.LEFT, padx=8)
        self._show_period(self.tracker.interval.get())

        self.info_var = tk.StringVar()
        tk.Label(
            self.root, textvariable=self.info_var, bg=bg, fg=fg, justify=tk.LEFT
        ).pack(anchor="w", padx=12, pady=4)

        self.warning_var = tk.StringVar()
        tk.Label(self.root, textvariable=self.warning_var, bg=bg, fg=_hex(style.warning)).pack(
            anchor="w", padx=12
        )

        self.chart_label = tk.Label(self.root, bg=bg)
        self.chart_label.pack(padx=12, pady=12)

    def _show_period(self, seconds: int) -> None:
        self.period_var.set(f"Sampling period: {format_period(seconds)}")

    def _on_period_change(self, value: str) -> None:
        seconds = int(float(value))
        try:
            self.tracker.interval.set(seconds)
        except ValueError as exc:
            logger.warning("Ignoring period %s: %s", value, exc)
            return
        self._show_period(seconds)

    def redraw(self) -> None:
        """Repaint from the current buffer and schedule the next repaint."""
        frame = self.tracker.render_frame()
        rows = device_rows(frame.snapshot.info, self.settings.user.time_format)
        self.info_var.set("\n".join(f"{label}: {value}" for label, value in rows))
        self.warning_var.set(frame.snapshot.warning or "")

        surface = self.tracker.render_raster(frame)
        self._photo = ImageTk.PhotoImage(surface.image)
        self.chart_label.configure(image=self._photo)

        self._after_id = self.root.after(
            self.settings.user.redraw_seconds * 1000, self.redraw
        )

    def close(self) -> None:
        if self._after_id is not None:
            self.root.after_cancel(self._after_id)
            self._after_id = None
        self.tracker.stop(timeout=1.0)
        self.root.destroy()

    def run(self) -> None:
        """Start the tracker and enter the Tk main loop."""
        self.tracker.start()
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self.redraw()
        self.root.mainloop()
