from importer_intel.config import settings
from importer_intel.session import DashboardSession

_session: DashboardSession | None = None


def get_session() -> DashboardSession:
    global _session
    if _session is None:
        _session = DashboardSession(settings)
    return _session
