from fastapi import APIRouter

from importer_intel.api.v1 import charts, health, importers, notifications, search, subscriptions

api_router = APIRouter()

api_router.include_router(health.router, prefix="/v1", tags=["health"])
api_router.include_router(search.router, prefix="/v1/search", tags=["search"])
api_router.include_router(importers.router, prefix="/v1/importers", tags=["importers"])
api_router.include_router(charts.router, prefix="/v1/charts", tags=["charts"])
api_router.include_router(subscriptions.router, prefix="/v1/subscriptions", tags=["subscriptions"])
api_router.include_router(notifications.router, prefix="/v1/notifications", tags=["notifications"])
