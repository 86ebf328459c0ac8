from fastapi import APIRouter, Depends

from importer_intel.dependencies import get_session
from importer_intel.schemas.alerts import Subscription
from importer_intel.session import DashboardSession

router = APIRouter()


@router.get("", response_model=list[Subscription])
async def list_subscriptions(session: DashboardSession = Depends(get_session)) -> list[Subscription]:
    return list(session.alerts.subscriptions.subscriptions)


@router.post("", response_model=Subscription)
async def subscribe(
    request: Subscription,
    session: DashboardSession = Depends(get_session),
) -> Subscription:
    """Subscribe to alerts for a company. A second subscription replaces the email."""
    return await session.alerts.subscribe(request.company_name, request.email)
