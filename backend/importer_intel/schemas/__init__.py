from importer_intel.schemas.alerts import Notification, NotificationListResponse, Subscription
from importer_intel.schemas.health import HealthResponse
from importer_intel.schemas.importer import DetailedImporterRecord, ImporterSummary, RawLead
from importer_intel.schemas.search import SearchRequest, SearchResponse

__all__ = [
    "DetailedImporterRecord",
    "HealthResponse",
    "ImporterSummary",
    "Notification",
    "NotificationListResponse",
    "RawLead",
    "SearchRequest",
    "SearchResponse",
    "Subscription",
]
