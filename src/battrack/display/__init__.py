"""Display package - chart geometry and the surfaces that draw it."""

from battrack.display.chart import ChartBounds, ChartGeometry, build_chart, draw_chart, format_time
from battrack.display.protocols import ChartSurface, MockSurface

__all__ = [
    "ChartBounds",
    "ChartGeometry",
    "ChartSurface",
    "MockSurface",
    "build_chart",
    "draw_chart",
    "format_time",
]
