"""HTML dashboard rendering for the battery chart."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any, Final, cast

from jinja2 import DictLoader, Environment, Template, select_autoescape
from markupsafe import Markup, escape

from battrack.display.chart import (
    ChartBounds,
    PlotArea,
    build_chart,
    draw_chart,
    format_point_label,
    format_time,
)
from battrack.display.protocols import RGB, RGBA, Point
from battrack.models.sample import DeviceInfo
from battrack.scheduling.models import format_period
from battrack.settings.application import ApplicationSettings
from battrack.system.buffer import BufferSnapshot
from battrack.utils.file import ensure_parent_directory
from battrack.utils.formatting import format_optional
from battrack.utils.time import TimeUtils

DASHBOARD_TEMPLATE: Final = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{{ title }}</title>
    <style>
        body {
            font-family: sans-serif;
            background-color: {{ background }};
            color: {{ text_color }};
            padding: 24px;
        }
        h1 { color: {{ heading_color }}; font-weight: normal; }
        table.info td { padding: 2px 12px 2px 0; }
        .warning { color: {{ warning_color }}; margin: 12px 0; }
        .period { margin-bottom: 12px; }
    </style>
</head>
<body>
    <h1>{{ title }}</h1>
    <div class="period">Sampling period: {{ period }}</div>
    {% if warning %}<div class="warning">{{ warning }}</div>{% endif %}
    {% if rows %}
    <table class="info">
        {% for label, value in rows %}
        <tr><td>{{ label }}</td><td>{{ value }}</td></tr>
        {% endfor %}
    </table>
    {% else %}
    <p>No samples recorded yet.</p>
    {% endif %}
    {{ chart }}
</body>
</html>"""


def _css_color(color: RGB | RGBA) -> str:
    if len(color) == 4:
        r, g, b, a = cast(RGBA, color)
        return f"rgba({r},{g},{b},{a / 255:.2f})"
    r, g, b = color[:3]
    return f"rgb({r},{g},{b})"


def device_rows(info: DeviceInfo | None, time_format: str) -> list[tuple[str, str]]:
    """Label/value pairs describing the battery, for the info panel.

    Args:
        info: Device info from the last record, or None before any sample
        time_format: strftime format for the last-sample timestamp

    Returns:
        Rows in display order; empty when there is no device info
    """
    if info is None:
        return []
    last = TimeUtils.format_datetime(info.timestamp, time_format) if info.timestamp else "n/a"
    return [
        ("Model", info.model or "n/a"),
        ("State", info.state.label),
        ("Charge cycles", format_optional(info.cycle_count)),
        ("Full energy", format_optional(info.energy_full, "Wh")),
        ("Design energy", format_optional(info.energy_full_design, "Wh")),
        ("Current energy", format_optional(info.energy, "Wh")),
        ("Voltage", format_optional(info.voltage, "V")),
        ("Health", format_optional(info.health, "%", precision=1)),
        ("Last sample", last),
    ]


class SvgChartSurface:
    """Collects the chart as SVG elements for the HTML dashboard.

    Every point of the line also gets an invisible marker with a hover
    title such as "(9.50 hr, 55.00%)".
    """

    def __init__(self, width: int, height: int, background: RGB = (24, 24, 32)) -> None:
        self.area = PlotArea(width, height)
        self.background = background
        self.elements: list[str] = []

    def set_viewport(self, bounds: ChartBounds) -> None:
        self.area = self.area.with_bounds(bounds)
        left, top, right, bottom = self.area.box
        self.elements.append(
            f'<rect x="{left}" y="{top}" width="{right - left}" height="{bottom - top}" '
            'fill="none" stroke="rgb(64,64,80)"/>'
        )

    def _points_attr(self, points: Sequence[Point]) -> str:
        return " ".join(
            f"{x:.1f},{y:.1f}" for x, y in (self.area.to_pixels(p) for p in points)
        )

    def polygon(self, points: Sequence[Point], fill: RGBA) -> None:
        self.elements.append(
            f'<polygon points="{self._points_attr(points)}" fill="{_css_color(fill)}"/>'
        )

    def line_strip(self, points: Sequence[Point], color: RGB, width: float) -> None:
        self.elements.append(
            f'<polyline points="{self._points_attr(points)}" fill="none" '
            f'stroke="{_css_color(color)}" stroke-width="{width}"/>'
        )
        for point in points:
            px, py = self.area.to_pixels(point)
            title = escape(f"{format_time(point[0])} {format_point_label(*point)}")
            self.elements.append(
                f'<circle cx="{px:.1f}" cy="{py:.1f}" r="4" fill-opacity="0">'
                f"<title>{title}</title></circle>"
            )

    def text(self, position: Point, label: str, color: RGB) -> None:
        x, y = self.area.to_pixels(position)
        self.elements.append(
            f'<text x="{x:.1f}" y="{y:.1f}" fill="{_css_color(color)}" font-size="12" '
            f'text-anchor="middle" dominant-baseline="middle">{escape(label)}</text>'
        )

    def markup(self) -> Markup:
        """Return the complete ``<svg>`` element."""
        body = "".join(self.elements)
        return Markup(
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.area.width}" '
            f'height="{self.area.height}" style="background:{_css_color(self.background)}">'
            f"{body}</svg>"
        )


class DashboardContextBuilder:
    """Builds template context from a buffer snapshot."""

    def __init__(self, settings: ApplicationSettings) -> None:
        self.settings = settings

    def build_dashboard_context(self, snapshot: BufferSnapshot) -> dict[str, Any]:
        """Build complete context for the dashboard template.

        Args:
            snapshot: Current buffer contents

        Returns:
            Template context dictionary
        """
        user = self.settings.user
        style = self.settings.style

        surface = SvgChartSurface(user.chart_width, user.chart_height, style.background)
        draw_chart(build_chart(snapshot.points), surface, style)

        return {
            "title": user.window_title,
            "period": format_period(self.settings.sample_interval.get()),
            "warning": snapshot.warning,
            "rows": device_rows(snapshot.info, user.time_format),
            "chart": surface.markup(),
            "point_count": len(snapshot.points),
            "background": _css_color(style.background),
            "text_color": _css_color(style.text),
            "heading_color": _css_color(style.heading),
            "warning_color": _css_color(style.warning),
        }


class DashboardRenderer:
    """Renders the HTML dashboard page with Jinja2."""

    dashboard_template: Template

    def __init__(
        self,
        settings: ApplicationSettings,
        context_builder: DashboardContextBuilder | None = None,
    ) -> None:
        self.context_builder = context_builder or DashboardContextBuilder(settings)
        self.env = Environment(
            loader=DictLoader({"dashboard.html.j2": DASHBOARD_TEMPLATE}),
            autoescape=select_autoescape(["html", "j2"]),
        )
        self.dashboard_template = self.env.get_template("dashboard.html.j2")

    def render_dashboard(self, snapshot: BufferSnapshot) -> str:
        """Render the page for a buffer snapshot."""
        ctx = self.context_builder.build_dashboard_context(snapshot)
        return self.dashboard_template.render(**ctx)

    def write(self, snapshot: BufferSnapshot, output_path: Path) -> Path:
        """Render the page and write it to ``output_path``."""
        ensure_parent_directory(output_path)
        output_path.write_text(self.render_dashboard(snapshot), encoding="utf-8")
        return output_path
