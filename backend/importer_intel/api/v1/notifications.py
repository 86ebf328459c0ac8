from fastapi import APIRouter, Depends, Response

from importer_intel.dependencies import get_session
from importer_intel.schemas.alerts import NotificationListResponse
from importer_intel.session import DashboardSession

router = APIRouter()


@router.get("", response_model=NotificationListResponse)
async def list_notifications(session: DashboardSession = Depends(get_session)) -> NotificationListResponse:
    return NotificationListResponse(
        notifications=session.alerts.list_notifications(),
        unread_count=session.alerts.unread_count,
    )


@router.delete("", status_code=204)
async def clear_notifications(session: DashboardSession = Depends(get_session)) -> Response:
    await session.alerts.clear_notifications()
    return Response(status_code=204)
