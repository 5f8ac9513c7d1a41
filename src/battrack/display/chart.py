"""Chart geometry for the 24-hour battery chart.

The chart always spans a fixed viewport of 0-24 hours by 0-100 percent.
This module only computes what to draw (line, filled area, labels); the
pixel work is left to a :class:`~battrack.display.protocols.ChartSurface`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final

from battrack.display.protocols import ChartSurface
from battrack.models.sample import TimeSeriesPoint
from battrack.settings.application import ChartStyle
from battrack.utils.time import TimeUtils

Point = tuple[float, float]

PERCENT_TICKS: Final = (0, 25, 50, 75, 100)
PERCENT_LABEL_X: Final = 24.5  # just right of the plot area
TIME_LABEL_Y: Final = -8.0  # just below the plot area
NOW_LABEL: Final = "now"


@dataclass(frozen=True)
class ChartBounds:
    """Fixed data-space viewport of the chart."""

    x_min: float = 0.0
    x_max: float = 24.0
    y_min: float = 0.0
    y_max: float = 100.0

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min


@dataclass(frozen=True)
class ChartLabel:
    """Text placed at a data-space position."""

    position: Point
    text: str


@dataclass(frozen=True)
class ChartGeometry:
    """Everything needed to draw one frame of the chart."""

    bounds: ChartBounds = field(default_factory=ChartBounds)
    line: tuple[Point, ...] = ()
    area: tuple[Point, ...] = ()
    y_labels: tuple[ChartLabel, ...] = ()
    x_labels: tuple[ChartLabel, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.line


def format_time(hour: float) -> str:
    """Format a fractional hour as "HH:MM".

    Minutes are rounded; 60 rounded minutes roll over into the next hour
    and hour 24 wraps to 00, so ``format_time(23.999)`` is "00:00".
    """
    hours, minutes = TimeUtils.split_hour_fraction(hour)
    return f"{hours:02d}:{minutes:02d}"


def format_point_label(x: float, y: float) -> str:
    """Hover text for a point, e.g. "(9.50 hr, 55.00%)"."""
    return f"({x:.2f} hr, {y:.2f}%)"


def area_polygon(points: Sequence[TimeSeriesPoint]) -> list[Point]:
    """Close the series down to y=0 at its first and last x-coordinates."""
    if not points:
        return []
    vertices: list[Point] = [(points[0].x, 0.0)]
    vertices.extend((p.x, p.y) for p in points)
    vertices.append((points[-1].x, 0.0))
    return vertices


def percentage_labels() -> list[ChartLabel]:
    """Gridline labels on the right-hand side of the chart."""
    return [ChartLabel((PERCENT_LABEL_X, float(y)), f"{y}%") for y in PERCENT_TICKS]


def time_labels(points: Sequence[TimeSeriesPoint]) -> list[ChartLabel]:
    """Time labels under the first, middle and last points.

    The middle label only appears with more than two points. The last
    point is always labelled "now"; a single point gets only that label.
    """
    n = len(points)
    if n == 0:
        return []
    labels: list[ChartLabel] = []
    if n > 1:
        first = points[0].x
        labels.append(ChartLabel((first, TIME_LABEL_Y), format_time(first)))
    if n > 2:
        mid = points[n // 2].x
        labels.append(ChartLabel((mid, TIME_LABEL_Y), format_time(mid)))
    labels.append(ChartLabel((points[-1].x, TIME_LABEL_Y), NOW_LABEL))
    return labels


def build_chart(points: Sequence[TimeSeriesPoint]) -> ChartGeometry:
    """Compute the chart for a time-ordered series.

    Args:
        points: Series in log order; x in hours, y in percent

    Returns:
        Geometry with fixed bounds; empty line and area for an empty series
    """
    return ChartGeometry(
        bounds=ChartBounds(),
        line=tuple((p.x, p.y) for p in points),
        area=tuple(area_polygon(points)),
        y_labels=tuple(percentage_labels()),
        x_labels=tuple(time_labels(points)),
    )


def draw_chart(
    geometry: ChartGeometry,
    surface: ChartSurface,
    style: ChartStyle | None = None,
) -> None:
    """Draw a chart onto a surface: area first, then line, then labels."""
    style = style or ChartStyle()
    surface.set_viewport(geometry.bounds)
    if geometry.area:
        surface.polygon(geometry.area, fill=style.area)
    if geometry.line:
        surface.line_strip(geometry.line, color=style.line, width=style.line_width)
    for label in geometry.y_labels + geometry.x_labels:
        surface.text(label.position, label.text, color=style.text)


@dataclass(frozen=True)
class PlotArea:
    """Maps data-space points onto a pixel canvas with margins.

    Labels placed just outside the viewport (percentages on the right,
    times below) land in the margins.
    """

    width: int
    height: int
    margins: tuple[int, int, int, int] = (24, 16, 56, 56)  # left, top, right, bottom
    bounds: ChartBounds = field(default_factory=ChartBounds)

    @property
    def box(self) -> tuple[int, int, int, int]:
        """Pixel rectangle (left, top, right, bottom) of the plot area."""
        left, top, right, bottom = self.margins
        return left, top, self.width - right, self.height - bottom

    def to_pixels(self, point: Point) -> tuple[float, float]:
        """Map a data-space point to pixel coordinates."""
        left, top, right, bottom = self.box
        x, y = point
        px = left + (x - self.bounds.x_min) / self.bounds.width * (right - left)
        py = top + (self.bounds.y_max - y) / self.bounds.height * (bottom - top)
        return px, py

    def with_bounds(self, bounds: ChartBounds) -> PlotArea:
        return PlotArea(self.width, self.height, self.margins, bounds)
