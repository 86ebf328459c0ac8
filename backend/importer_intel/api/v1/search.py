"""Search endpoints: run a search and read back the current result lists."""

from fastapi import APIRouter, Depends, HTTPException

from importer_intel.dependencies import get_session
from importer_intel.errors import SearchRejected
from importer_intel.schemas.search import SearchRequest, SearchResponse
from importer_intel.search_orchestrator.service import SearchOrchestrator, SearchOutcome
from importer_intel.session import DashboardSession

router = APIRouter()


def _to_response(outcome: SearchOutcome, orchestrator: SearchOrchestrator) -> SearchResponse:
    return SearchResponse(
        primary=outcome.primary,
        similar=outcome.similar,
        error=outcome.error,
        in_flight=orchestrator.in_flight,
    )


async def run_search(orchestrator: SearchOrchestrator, coro) -> SearchResponse:
    """Await a search call, mapping a refused search to 400 (blank) or 409 (busy)."""
    try:
        outcome = await coro
    except SearchRejected as e:
        status = 409 if e.reason == SearchRejected.IN_FLIGHT else 400
        raise HTTPException(status_code=status, detail=str(e))
    return _to_response(outcome, orchestrator)


@router.post("", response_model=SearchResponse)
async def search_importers(
    request: SearchRequest,
    session: DashboardSession = Depends(get_session),
) -> SearchResponse:
    """Run the primary and similar searches. Replaces the previous results."""
    orchestrator = session.search
    return await run_search(
        orchestrator,
        orchestrator.search(request.query, request.city, request.state, request.industry),
    )


@router.get("/results", response_model=SearchResponse)
async def get_results(session: DashboardSession = Depends(get_session)) -> SearchResponse:
    """Current primary and similar lists."""
    return _to_response(session.search.outcome(), session.search)
