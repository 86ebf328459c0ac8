from importer_intel.charts.bar_chart import BarChartLayout, InsufficientData, Viewport, layout_bar_chart
from importer_intel.charts.sparkline import normalize
from importer_intel.charts.world_map import TradeMap, canonical_country_name, render_map

__all__ = [
    "BarChartLayout",
    "InsufficientData",
    "TradeMap",
    "Viewport",
    "canonical_country_name",
    "layout_bar_chart",
    "normalize",
    "render_map",
]
