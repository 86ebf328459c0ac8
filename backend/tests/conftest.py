from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from factories import make_detail, make_mock_settings
from importer_intel.config import Settings
from importer_intel.services.intel_client import ImporterIntelClient
from importer_intel.session import DashboardSession


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_mock_settings(data_dir=str(tmp_path / "data"))


@pytest.fixture
def intel_client() -> MagicMock:
    """ImporterIntelClient double with async operations."""
    client = MagicMock(spec=ImporterIntelClient)
    client.search_importers = AsyncMock(return_value=[])
    client.search_similar_importers = AsyncMock(return_value=[])
    client.fetch_detailed_importer = AsyncMock(return_value=make_detail())
    return client


@pytest.fixture
def session(settings, intel_client) -> DashboardSession:
    return DashboardSession(settings, client=intel_client)


@pytest.fixture
async def client(session):
    from importer_intel.dependencies import get_session
    from importer_intel.main import app

    app.dependency_overrides[get_session] = lambda: session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
