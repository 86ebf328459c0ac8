"""Chart endpoints: volume bar chart, commodity sparklines and the trade map.

SVG endpoints return markup ready to inline; the hover endpoints return the
tooltip geometry for a pointer position.
"""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Response

from importer_intel.api.v1.importers import require_active
from importer_intel.api.v1.search import run_search
from importer_intel.charts.bar_chart import (
    BarChartLayout,
    InsufficientData,
    layout_bar_chart,
    pointer_to_viewbox,
    render_bar_chart_svg,
)
from importer_intel.charts.sparkline import render_sparkline_svg
from importer_intel.charts.world_map import LEGEND, TradeMap, render_map, render_map_svg
from importer_intel.dependencies import get_session
from importer_intel.schemas.charts import (
    BarTooltipResponse,
    MapClickRequest,
    MapRegionResponse,
    MapTooltipResponse,
    TradeMapResponse,
)
from importer_intel.schemas.search import SearchResponse
from importer_intel.session import DashboardSession

router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml"


def _volume_layout(session: DashboardSession) -> BarChartLayout:
    layout = layout_bar_chart(require_active(session).record.shipment_volume_history)
    if isinstance(layout, InsufficientData):
        raise HTTPException(status_code=422, detail=layout.message)
    return layout


def _trade_map(session: DashboardSession) -> TradeMap:
    return render_map(
        require_active(session).record.top_trade_partners,
        on_country_click=session.search.search_similar_to,
    )


@router.get("/volume.svg")
async def volume_chart(
    hover_x: float | None = None,
    session: DashboardSession = Depends(get_session),
) -> Response:
    layout = _volume_layout(session)
    tooltip = layout.hover(hover_x) if hover_x is not None else None
    return Response(content=render_bar_chart_svg(layout, tooltip), media_type=SVG_MEDIA_TYPE)


@router.get("/volume/hover", response_model=BarTooltipResponse | None)
async def volume_hover(
    x: float | None = None,
    client_x: float | None = None,
    rect_left: float = 0.0,
    rect_width: float | None = None,
    session: DashboardSession = Depends(get_session),
) -> BarTooltipResponse | None:
    """Tooltip for the pointer; null outside the plotted slots.

    Pass either a viewBox ``x`` or the raw pointer ``client_x`` with the
    rendered chart's ``rect_left`` and ``rect_width``.
    """
    layout = _volume_layout(session)
    if x is None:
        if client_x is None or rect_width is None:
            raise HTTPException(status_code=422, detail="Provide x, or client_x with rect_width")
        x = pointer_to_viewbox(client_x, rect_left, rect_width, layout.viewport)
    tooltip = layout.hover(x)
    if tooltip is None:
        return None
    return BarTooltipResponse(
        year=tooltip.year,
        volume=tooltip.volume,
        x=tooltip.x,
        y=tooltip.y,
        left_pct=tooltip.left_pct,
        top_pct=tooltip.top_pct,
    )


@router.get("/commodities/{index}/sparkline.svg")
async def commodity_sparkline(
    index: int,
    series: Literal["volume", "price"] = "volume",
    session: DashboardSession = Depends(get_session),
) -> Response:
    flows = require_active(session).record.top_commodity_flows
    if index < 0 or index >= len(flows):
        raise HTTPException(status_code=404, detail="Commodity flow not found")
    flow = flows[index]
    values = flow.import_volume_trend_data if series == "volume" else flow.price_trend_data
    svg = render_sparkline_svg(values or [])
    if not svg:
        return Response(status_code=204)
    return Response(content=svg, media_type=SVG_MEDIA_TYPE)


@router.get("/map", response_model=TradeMapResponse)
async def trade_map(session: DashboardSession = Depends(get_session)) -> TradeMapResponse:
    """Region fills plus partners that have no shape on the map."""
    trade_map = _trade_map(session)
    return TradeMapResponse(
        regions=[
            MapRegionResponse(
                name=region.name,
                fill=region.fill,
                trade_volume=region.partner.trade_volume if region.partner else None,
            )
            for region in trade_map.regions
        ],
        unmapped=trade_map.unmapped,
        legend=[{"label": label, "color": color} for label, color in LEGEND],
    )


@router.get("/map.svg")
async def trade_map_svg(session: DashboardSession = Depends(get_session)) -> Response:
    return Response(content=render_map_svg(_trade_map(session)), media_type=SVG_MEDIA_TYPE)


@router.get("/map/hover", response_model=MapTooltipResponse)
async def trade_map_hover(
    country: str,
    pointer_x: float,
    pointer_y: float,
    left: float = 0.0,
    top: float = 0.0,
    session: DashboardSession = Depends(get_session),
) -> MapTooltipResponse:
    tooltip = _trade_map(session).hover(country, pointer_x, pointer_y, left, top)
    return MapTooltipResponse(
        country=tooltip.country,
        volume=tooltip.volume,
        x=tooltip.x,
        y=tooltip.y,
        left=tooltip.left,
    )


@router.post("/map/click", response_model=SearchResponse)
async def trade_map_click(
    request: MapClickRequest,
    session: DashboardSession = Depends(get_session),
) -> SearchResponse:
    """Search for importers related to the clicked country."""
    return await run_search(session.search, _trade_map(session).click(request.country))
