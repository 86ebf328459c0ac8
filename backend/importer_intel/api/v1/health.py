import os
from datetime import datetime, timezone

from fastapi import APIRouter

from importer_intel import __version__
from importer_intel.config import settings
from importer_intel.schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    anthropic_status = "configured" if settings.anthropic_api_key else "missing_api_key"

    # Data dir is created on first write, so a missing dir is still fine
    data_status = "healthy"
    if os.path.exists(settings.data_dir) and not os.access(settings.data_dir, os.W_OK):
        data_status = "read_only"

    overall = "healthy" if anthropic_status == "configured" and data_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall,
        anthropic=anthropic_status,
        data_dir=data_status,
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        version=__version__,
    )
