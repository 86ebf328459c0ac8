"""Active importer endpoints: select, refresh, derived views and exports."""

from typing import Literal

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from importer_intel.api.v1.search import run_search
from importer_intel.charts.sparkline import normalize
from importer_intel.dependencies import get_session
from importer_intel.parsing.risk import classify_assessment, classify_trend
from importer_intel.parsing.shipment_parser import history_view
from importer_intel.record_store.store import ActiveRecord
from importer_intel.schemas.importer import ContactInfo
from importer_intel.schemas.record import (
    ActiveRecordResponse,
    CommodityFlowView,
    HistoryEntry,
    HistoryResponse,
    RefreshResponse,
    RiskBadge,
    SelectRequest,
    ShareResponse,
)
from importer_intel.schemas.search import SearchResponse
from importer_intel.services.export_service import (
    export_csv,
    export_filename,
    export_json,
    mailto_link,
    share_link,
)
from importer_intel.session import DashboardSession

router = APIRouter()


def _to_response(active: ActiveRecord) -> ActiveRecordResponse:
    contact = active.record.contact
    return ActiveRecordResponse(
        target=active.target,
        status=active.status.value,
        record=active.record,
        error=active.error,
        refreshing=active.refreshing,
        refresh_error=active.refresh_error,
        contact_available=contact.available() if isinstance(contact, ContactInfo) else None,
    )


def require_active(session: DashboardSession) -> ActiveRecord:
    active = session.records.active
    if active is None:
        raise HTTPException(status_code=404, detail="No importer selected")
    return active


@router.post("/select", response_model=ActiveRecordResponse)
async def select_importer(
    request: SelectRequest,
    background_tasks: BackgroundTasks,
    session: DashboardSession = Depends(get_session),
) -> ActiveRecordResponse:
    """Show the placeholder now; the detail fetch runs after the response is sent."""
    active = session.details.select(request.name)
    if active is None:
        raise HTTPException(status_code=404, detail="Importer not found in current results")
    background_tasks.add_task(session.details.load, request.name)
    return _to_response(active)


@router.get("/active", response_model=ActiveRecordResponse)
async def get_active(session: DashboardSession = Depends(get_session)) -> ActiveRecordResponse:
    return _to_response(require_active(session))


@router.delete("/active", status_code=204)
async def close_active(session: DashboardSession = Depends(get_session)) -> Response:
    session.records.close()
    return Response(status_code=204)


@router.post("/active/refresh", response_model=RefreshResponse)
async def refresh_active(session: DashboardSession = Depends(get_session)) -> RefreshResponse:
    """Re-fetch the active record. A failed refresh keeps the record shown before it."""
    active = require_active(session)
    started = await session.details.refresh(active.target)
    if not started:
        raise HTTPException(status_code=409, detail="Details for this importer are already loading")
    return RefreshResponse(started=started, active=_to_response(require_active(session)))


@router.get("/active/similar", response_model=SearchResponse)
async def get_similar(session: DashboardSession = Depends(get_session)) -> SearchResponse:
    """Related importers from the current search."""
    require_active(session)
    outcome = session.search.outcome()
    return SearchResponse(primary=outcome.primary, similar=outcome.similar, error=outcome.error)


@router.post("/active/search-similar", response_model=SearchResponse)
async def search_similar(session: DashboardSession = Depends(get_session)) -> SearchResponse:
    """Start a new search for the active importer's name. Closes the detail view."""
    active = require_active(session)
    return await run_search(session.search, session.search.search_similar_to(active.target))


@router.get("/active/history", response_model=HistoryResponse)
async def get_history(
    filter: str = "",
    order: Literal["asc", "desc"] = "desc",
    session: DashboardSession = Depends(get_session),
) -> HistoryResponse:
    """Shipment history filtered and sorted on a copy, with parsed event fields."""
    record = require_active(session).record
    entries = [HistoryEntry(**entry) for entry in history_view(record.shipment_history, filter, order)]
    return HistoryResponse(entries=entries, total=len(record.shipment_history))


@router.get("/active/risk", response_model=list[RiskBadge])
async def get_risk(session: DashboardSession = Depends(get_session)) -> list[RiskBadge]:
    record = require_active(session).record
    return [RiskBadge(**badge) for badge in classify_assessment(record.risk_assessment)]


@router.get("/active/commodities", response_model=list[CommodityFlowView])
async def get_commodities(session: DashboardSession = Depends(get_session)) -> list[CommodityFlowView]:
    record = require_active(session).record
    return [
        CommodityFlowView(
            index=i,
            name=flow.name,
            percentage=flow.percentage,
            average_price=flow.average_price,
            top_supplier=flow.top_supplier,
            market_trend=flow.market_trend,
            trend=classify_trend(flow.market_trend).value,
            has_sparkline=bool(normalize(flow.import_volume_trend_data or [])),
        )
        for i, flow in enumerate(record.top_commodity_flows)
    ]


@router.get("/active/share", response_model=ShareResponse)
async def get_share_links(session: DashboardSession = Depends(get_session)) -> ShareResponse:
    name = require_active(session).record.name
    base_url = session.settings.public_base_url
    return ShareResponse(link=share_link(base_url, name), mailto=mailto_link(base_url, name))


@router.get("/active/export.csv")
async def export_active_csv(session: DashboardSession = Depends(get_session)) -> Response:
    record = require_active(session).record
    return Response(
        content=export_csv(record),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(record.name, "csv")}"'},
    )


@router.get("/active/export.json")
async def export_active_json(session: DashboardSession = Depends(get_session)) -> Response:
    record = require_active(session).record
    return Response(
        content=export_json(record),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(record.name, "json")}"'},
    )
