"""Annual shipment volume bar chart.

Pure geometry: a (year, volume) series goes in, bars, gridlines and a hover
lookup come out, all in viewBox units. Screen Y grows downward, so the volume
scale is inverted.
"""

from dataclasses import dataclass, field
from html import escape
from typing import Iterable

HEADROOM = 1.1
MAX_BAR_WIDTH = 40.0
BAR_SLOT_FILL = 0.6
TICK_COUNT = 4
BAR_COLOR = "#f97316"

INSUFFICIENT_DATA_MESSAGE = "Not enough annual volume data to display a chart."


@dataclass(frozen=True)
class Padding:
    top: float = 20
    right: float = 20
    bottom: float = 30
    left: float = 60


@dataclass(frozen=True)
class Viewport:
    width: float = 500
    height: float = 200
    padding: Padding = field(default_factory=Padding)

    @property
    def chart_width(self) -> float:
        return self.width - self.padding.left - self.padding.right

    @property
    def chart_height(self) -> float:
        return self.height - self.padding.top - self.padding.bottom


@dataclass(frozen=True)
class InsufficientData:
    points: int
    message: str = INSUFFICIENT_DATA_MESSAGE


@dataclass(frozen=True)
class Bar:
    year: int
    volume: float
    x: float
    y: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


@dataclass(frozen=True)
class Tick:
    value: int
    y: float
    label: str


@dataclass(frozen=True)
class BarTooltip:
    year: int
    volume: float
    x: float
    y: float
    left_pct: float
    top_pct: float


def format_axis_label(value: float) -> str:
    if value >= 1000:
        return f"{value / 1000:.1f}k"
    return str(int(value))


@dataclass
class BarChartLayout:
    viewport: Viewport
    series: list[tuple[int, float]]
    max_volume: float
    slot_width: float
    bar_width: float
    bars: list[Bar] = field(default_factory=list)
    ticks: list[Tick] = field(default_factory=list)

    @property
    def baseline_y(self) -> float:
        return self.scale_y(0)

    def scale_y(self, volume: float) -> float:
        """Map a volume onto the inverted Y axis. Zero (and below) sits on the baseline."""
        pad = self.viewport.padding
        bottom = pad.top + self.viewport.chart_height
        if self.max_volume <= 0 or volume <= 0:
            return bottom
        return bottom - (volume / self.max_volume) * self.viewport.chart_height

    def bar_x(self, index: int) -> float:
        return self.viewport.padding.left + self.slot_width * index + (self.slot_width - self.bar_width) / 2

    def hover(self, x: float) -> BarTooltip | None:
        """Tooltip for a pointer at viewBox X ``x``.

        The whole slot is the hover zone, not just the bar's pixels.
        """
        vp = self.viewport
        if x < vp.padding.left or x > vp.width - vp.padding.right:
            return None

        index = int((x - vp.padding.left) // self.slot_width)
        if index < 0 or index >= len(self.bars):
            return None

        bar = self.bars[index]
        anchor_x = bar.center_x
        anchor_y = self.scale_y(bar.volume)
        return BarTooltip(
            year=bar.year,
            volume=bar.volume,
            x=anchor_x,
            y=anchor_y,
            left_pct=anchor_x / vp.width * 100,
            top_pct=anchor_y / vp.height * 100,
        )


def pointer_to_viewbox(client_x: float, rect_left: float, rect_width: float, viewport: Viewport) -> float:
    """Convert a client pointer X to viewBox units for a chart rendered at ``rect_width`` pixels."""
    if rect_width <= 0:
        return client_x - rect_left
    return (client_x - rect_left) * viewport.width / rect_width


def layout_bar_chart(
    series: Iterable,
    viewport: Viewport | None = None,
) -> BarChartLayout | InsufficientData:
    """Lay out bars for a volume history.

    Args:
        series: Items with ``year`` and ``volume`` (attributes or dict keys).
            Sorted by year on a copy; the caller's sequence is untouched.
        viewport: Drawing area; defaults to 500x200 with 20/20/30/60 padding.

    Returns:
        BarChartLayout, or InsufficientData when fewer than two points exist.
    """
    viewport = viewport or Viewport()
    points = [_as_point(item) for item in series]
    if len(points) < 2:
        return InsufficientData(points=len(points))

    points = sorted(points, key=lambda p: p[0])
    max_volume = max(max(v for _, v in points), 0) * HEADROOM

    slot_width = viewport.chart_width / len(points)
    bar_width = min(MAX_BAR_WIDTH, slot_width * BAR_SLOT_FILL)

    layout = BarChartLayout(
        viewport=viewport,
        series=points,
        max_volume=max_volume,
        slot_width=slot_width,
        bar_width=bar_width,
    )

    baseline = layout.baseline_y
    for i, (year, volume) in enumerate(points):
        top = layout.scale_y(volume)
        layout.bars.append(Bar(
            year=year,
            volume=volume,
            x=layout.bar_x(i),
            y=top,
            width=bar_width,
            height=baseline - top,
        ))

    if max_volume > 0:
        step = max_volume / TICK_COUNT
        for i in range(TICK_COUNT + 1):
            value = round(i * step)
            layout.ticks.append(Tick(value=value, y=layout.scale_y(value), label=format_axis_label(value)))

    return layout


def _as_point(item) -> tuple[int, float]:
    if isinstance(item, dict):
        return int(item["year"]), float(item["volume"])
    if isinstance(item, (tuple, list)):
        return int(item[0]), float(item[1])
    return int(item.year), float(item.volume)


def render_bar_chart_svg(layout: BarChartLayout, tooltip: BarTooltip | None = None) -> str:
    vp = layout.viewport
    pad = vp.padding
    parts: list[str] = [
        f'<svg viewBox="0 0 {vp.width:g} {vp.height:g}" xmlns="http://www.w3.org/2000/svg">'
    ]

    for tick in layout.ticks:
        parts.append(
            f'<line x1="{pad.left:.2f}" x2="{vp.width - pad.right:.2f}" '
            f'y1="{tick.y:.2f}" y2="{tick.y:.2f}" stroke="#64748b" '
            f'stroke-width="0.5" stroke-dasharray="3,3"/>'
        )
        parts.append(
            f'<text x="{pad.left - 10:.2f}" y="{tick.y:.2f}" text-anchor="end" '
            f'alignment-baseline="middle" font-size="10" fill="#64748b">{escape(tick.label)}</text>'
        )

    for bar in layout.bars:
        parts.append(
            f'<rect x="{bar.x:.2f}" y="{bar.y:.2f}" width="{bar.width:.2f}" '
            f'height="{bar.height:.2f}" fill="{BAR_COLOR}"/>'
        )
        parts.append(
            f'<text x="{bar.center_x:.2f}" y="{vp.height - pad.bottom + 15:.2f}" '
            f'text-anchor="middle" font-size="10" fill="#94a3b8">{bar.year}</text>'
        )

    if tooltip is not None:
        parts.append(
            f'<circle cx="{tooltip.x:.2f}" cy="{tooltip.y:.2f}" r="4" fill="#fff" '
            f'stroke="{BAR_COLOR}" stroke-width="2" pointer-events="none"/>'
        )

    parts.append("</svg>")
    return "\n".join(parts)
