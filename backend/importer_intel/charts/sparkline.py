"""Minimal trend sparkline for commodity import volumes."""

import math

WIDTH = 100.0
HEIGHT = 25.0
STROKE_WIDTH = 1.5
STROKE = "#f97316"


def normalize(
    values: list[float],
    width: float = WIDTH,
    height: float = HEIGHT,
    stroke_width: float = STROKE_WIDTH,
) -> list[tuple[float, float]]:
    """Polyline points for ``values``; empty when fewer than two finite values.

    X spreads the indices evenly across ``width``. Y maps [min, max] into the
    height inset by half the stroke on each side, max at the top. A constant
    series draws a flat line at mid-height.
    """
    data = [float(v) for v in values if v is not None and math.isfinite(float(v))]
    if len(data) < 2:
        return []

    low, high = min(data), max(data)
    spread = high - low
    inset = stroke_width / 2
    usable = height - 2 * inset
    last = len(data) - 1

    points = []
    for i, value in enumerate(data):
        x = i / last * width
        if spread == 0:
            y = height / 2
        else:
            y = height - inset - (value - low) / spread * usable
        points.append((x, y))
    return points


def points_attribute(points: list[tuple[float, float]]) -> str:
    return " ".join(f"{x:.2f},{y:.2f}" for x, y in points)


def render_sparkline_svg(values: list[float]) -> str:
    """SVG markup for the sparkline, or an empty string when there is nothing to draw."""
    points = normalize(values)
    if not points:
        return ""
    return (
        f'<svg width="{WIDTH:g}" height="{HEIGHT:g}" viewBox="0 0 {WIDTH:g} {HEIGHT:g}" '
        f'xmlns="http://www.w3.org/2000/svg">'
        f'<polyline fill="none" stroke="{STROKE}" stroke-width="{STROKE_WIDTH:g}" '
        f'points="{points_attribute(points)}" stroke-linecap="round" stroke-linejoin="round"/>'
        f"</svg>"
    )
