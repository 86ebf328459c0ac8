"""Stylized trade-partner world map.

Partner country names are resolved through a small alias table and matched
against a fixed set of region shapes. Partners in countries without a shape
cannot be drawn; they are reported as ``unmapped`` and still show in the
tabular partner list.
"""

import enum
from dataclasses import dataclass, field
from html import escape
from typing import Callable, Iterable

from importer_intel.schemas.importer import TradePartner

COUNTRY_ALIASES: dict[str, str] = {
    "USA": "United States",
    "United States of America": "United States",
    "UK": "United Kingdom",
    "UAE": "United Arab Emirates",
    "South Korea": "Republic of Korea",
    "Russia": "Russian Federation",
}

# Simplified region outlines on a 960x500 canvas
MAP_REGIONS: dict[str, str] = {
    "United States": "M100 100 H 250 V 200 H 100 Z",
    "China": "M650 150 H 780 V 250 H 650 Z",
    "Germany": "M480 120 H 510 V 140 H 480 Z",
    "Japan": "M800 160 H 830 V 180 H 800 Z",
    "India": "M630 250 H 680 V 300 H 630 Z",
    "Brazil": "M300 300 H 400 V 400 H 300 Z",
    "Canada": "M100 50 H 250 V 100 H 100 Z",
    "Australia": "M750 350 H 850 V 420 H 750 Z",
}

MAP_WIDTH = 960
MAP_HEIGHT = 500
TOOLTIP_OFFSET_X = 15
NO_PARTNER_FILL = "#475569"
REGION_STROKE = "#334155"


class VolumeTier(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NO_DATA = "no_data"


TIER_COLORS: dict[VolumeTier, str] = {
    VolumeTier.HIGH: "#f97316",
    VolumeTier.MEDIUM: "#fb923c",
    VolumeTier.LOW: "#fcd34d",
    VolumeTier.NO_DATA: "#cbd5e1",
}

LEGEND: list[tuple[str, str]] = [
    ("High", TIER_COLORS[VolumeTier.HIGH]),
    ("Medium / Value", TIER_COLORS[VolumeTier.MEDIUM]),
    ("Low", TIER_COLORS[VolumeTier.LOW]),
]


def canonical_country_name(name: str) -> str:
    name = (name or "").strip()
    return COUNTRY_ALIASES.get(name, name)


def volume_tier(volume: str) -> VolumeTier:
    """Tier for a qualitative or quantitative trade-volume string.

    Any digit means a specific quantity, drawn at medium weight.
    """
    vol = (volume or "").lower()
    if "high" in vol:
        return VolumeTier.HIGH
    if "medium" in vol:
        return VolumeTier.MEDIUM
    if "low" in vol:
        return VolumeTier.LOW
    if any(ch.isdigit() for ch in vol):
        return VolumeTier.MEDIUM
    return VolumeTier.NO_DATA


def volume_color(volume: str) -> str:
    return TIER_COLORS[volume_tier(volume)]


@dataclass(frozen=True)
class RegionFill:
    name: str
    path: str
    fill: str
    partner: TradePartner | None = None


@dataclass(frozen=True)
class MapTooltip:
    country: str
    volume: str
    x: float
    y: float

    @property
    def left(self) -> float:
        return self.x + TOOLTIP_OFFSET_X


@dataclass
class TradeMap:
    """Region fills for a set of partners plus hover and click handling."""

    partners_by_country: dict[str, TradePartner]
    regions: list[RegionFill] = field(default_factory=list)
    unmapped: list[str] = field(default_factory=list)
    on_country_click: Callable[[str], object] | None = None

    def hover(
        self,
        country: str,
        pointer_x: float,
        pointer_y: float,
        container_left: float = 0.0,
        container_top: float = 0.0,
    ) -> MapTooltip:
        """Tooltip anchored at the pointer, relative to the map container's box."""
        canonical = canonical_country_name(country)
        partner = self.partners_by_country.get(canonical)
        return MapTooltip(
            country=canonical,
            volume=partner.trade_volume if partner else "N/A",
            x=pointer_x - container_left,
            y=pointer_y - container_top,
        )

    def click(self, country: str) -> object:
        """Pass the canonical country name to the click callback.

        Returns whatever the callback returns, or the canonical name when no
        callback is set.
        """
        canonical = canonical_country_name(country)
        if self.on_country_click is None:
            return canonical
        return self.on_country_click(canonical)


def render_map(
    partners: Iterable[TradePartner],
    on_country_click: Callable[[str], object] | None = None,
) -> TradeMap:
    # Later partners with the same canonical name replace earlier ones
    by_country: dict[str, TradePartner] = {}
    for partner in partners:
        by_country[canonical_country_name(partner.country)] = partner

    trade_map = TradeMap(partners_by_country=by_country, on_country_click=on_country_click)
    for name, path in MAP_REGIONS.items():
        partner = by_country.get(name)
        fill = volume_color(partner.trade_volume) if partner else NO_PARTNER_FILL
        trade_map.regions.append(RegionFill(name=name, path=path, fill=fill, partner=partner))

    trade_map.unmapped = [name for name in by_country if name not in MAP_REGIONS]
    return trade_map


def render_map_svg(trade_map: TradeMap) -> str:
    parts: list[str] = [
        f'<svg viewBox="0 0 {MAP_WIDTH} {MAP_HEIGHT}" xmlns="http://www.w3.org/2000/svg">',
        "<g>",
    ]
    for region in trade_map.regions:
        parts.append(
            f'<path d="{region.path}" fill="{region.fill}" stroke="{REGION_STROKE}" '
            f'stroke-width="0.5" data-country="{escape(region.name)}">'
            f"<title>{escape(region.name)}</title></path>"
        )
    parts.append("</g>")

    parts.append('<g font-size="12" fill="#cbd5e1">')
    parts.append(f'<text x="10" y="{MAP_HEIGHT - 70}" font-weight="bold">Trade Volume</text>')
    for i, (label, color) in enumerate(LEGEND):
        y = MAP_HEIGHT - 60 + i * 18
        parts.append(f'<rect x="10" y="{y}" width="12" height="12" rx="2" fill="{color}"/>')
        parts.append(f'<text x="28" y="{y + 10}">{escape(label)}</text>')
    parts.append("</g>")

    parts.append("</svg>")
    return "\n".join(parts)
