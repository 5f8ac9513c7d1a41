# src/battrack/display/protocols.py
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from battrack.display.chart import ChartBounds

Point = tuple[float, float]
RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]


@runtime_checkable
class ChartSurface(Protocol):
    """Protocol defining the drawing primitives the chart needs.

    Positions are given in data space (hours, percent). Implementations
    map them onto their own pixel or document coordinates using the
    viewport set by :meth:`set_viewport`.
    """

    def set_viewport(self, bounds: ChartBounds) -> None:
        """Fix the visible data range.

        Args:
            bounds: Data-space rectangle mapped onto the plot area
        """
        ...

    def polygon(self, points: Sequence[Point], fill: RGBA) -> None:
        """Draw a filled polygon."""
        ...

    def line_strip(self, points: Sequence[Point], color: RGB, width: float) -> None:
        """Draw a line through the points in order."""
        ...

    def text(self, position: Point, label: str, color: RGB) -> None:
        """Draw a text label centred on a data-space position."""
        ...


class MockSurface:
    """Mock implementation of ChartSurface for testing."""

    def __init__(self) -> None:
        self.bounds: ChartBounds | None = None
        self.polygons: list[list[Point]] = []
        self.lines: list[list[Point]] = []
        self.texts: list[tuple[Point, str]] = []

    def set_viewport(self, bounds: ChartBounds) -> None:
        self.bounds = bounds

    def polygon(self, points: Sequence[Point], fill: RGBA) -> None:
        self.polygons.append(list(points))

    def line_strip(self, points: Sequence[Point], color: RGB, width: float) -> None:
        self.lines.append(list(points))

    def text(self, position: Point, label: str, color: RGB) -> None:
        self.texts.append((position, label))

    @property
    def labels(self) -> list[str]:
        """Text of every label drawn, in drawing order."""
        return [label for _, label in self.texts]

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.bounds = None
        self.polygons = []
        self.lines = []
        self.texts = []
