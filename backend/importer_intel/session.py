"""Process-wide dashboard state for a single user session."""

from importer_intel.alerts.service import AlertService
from importer_intel.config import Settings
from importer_intel.record_store.controller import DetailController
from importer_intel.record_store.store import ImporterRecordStore
from importer_intel.search_orchestrator.service import SearchOrchestrator
from importer_intel.services.intel_client import ImporterIntelClient


class DashboardSession:
    """Wires the client, record store, search and alerts together.

    The detail controller resolves names against the orchestrator's current
    result lists, so only importers on screen can be selected.
    """

    def __init__(
        self,
        settings: Settings,
        client: ImporterIntelClient | None = None,
        alerts: AlertService | None = None,
    ):
        self.settings = settings
        self.client = client or ImporterIntelClient(settings)
        self.records = ImporterRecordStore()
        self.search = SearchOrchestrator(self.client, self.records)
        self.details = DetailController(self.records, self.client, self.search.find_summary)
        self.alerts = alerts or AlertService(settings)
