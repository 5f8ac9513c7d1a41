"""Pillow-backed chart surface."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from PIL import Image, ImageDraw, ImageFont

from battrack.display.chart import ChartBounds, PlotArea
from battrack.display.protocols import RGB, RGBA, Point
from battrack.utils.file import ensure_parent_directory

logger: Final = logging.getLogger(__name__)

FRAME_COLOR: Final = (64, 64, 80)


class RasterChartSurface:
    """Draws the chart into an RGBA Pillow image."""

    def __init__(self, width: int, height: int, background: RGB = (24, 24, 32)) -> None:
        """Initialize a blank surface.

        Args:
            width: Image width in pixels
            height: Image height in pixels
            background: Background color
        """
        self.area = PlotArea(width, height)
        self.image = Image.new("RGBA", (width, height), background + (255,))
        self._draw = ImageDraw.Draw(self.image, "RGBA")
        self._font = ImageFont.load_default()

    def set_viewport(self, bounds: ChartBounds) -> None:
        self.area = self.area.with_bounds(bounds)
        self._draw.rectangle(self.area.box, outline=FRAME_COLOR)

    def polygon(self, points: Sequence[Point], fill: RGBA) -> None:
        if len(points) < 3:
            return
        self._draw.polygon([self.area.to_pixels(p) for p in points], fill=fill)

    def line_strip(self, points: Sequence[Point], color: RGB, width: float) -> None:
        pixels = [self.area.to_pixels(p) for p in points]
        if len(pixels) == 1:
            x, y = pixels[0]
            r = max(width, 2.0)
            self._draw.ellipse((x - r, y - r, x + r, y + r), fill=color)
            return
        self._draw.line(pixels, fill=color, width=max(1, round(width)), joint="curve")

    def text(self, position: Point, label: str, color: RGB) -> None:
        x, y = self.area.to_pixels(position)
        left, top, right, bottom = self._draw.textbbox((0, 0), label, font=self._font)
        self._draw.text(
            (x - (right - left) / 2, y - (bottom - top) / 2),
            label,
            fill=color,
            font=self._font,
        )

    def save(self, output_path: Path) -> None:
        """Write the image; the format follows the file suffix."""
        ensure_parent_directory(output_path)
        self.image.convert("RGB").save(output_path)
        logger.debug("Chart written to %s", output_path)
