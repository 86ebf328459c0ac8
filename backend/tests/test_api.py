"""End-to-end tests of the HTTP surface with the intel client mocked."""

import pytest

from factories import make_detail, make_summary
from importer_intel.errors import GenerationError, MalformedResponseError


async def _search_and_select(client, intel_client, name="Acme Imports Inc"):
    intel_client.search_importers.return_value = [make_summary("Acme Imports Inc")]
    intel_client.search_similar_importers.return_value = [make_summary("Beta Trading")]
    await client.post("/api/v1/search", json={"query": "led lights"})
    return await client.post("/api/v1/importers/select", json={"name": name})


# ── Search ──


class TestSearchEndpoints:
    @pytest.mark.asyncio
    async def test_search_returns_both_lists(self, client, intel_client):
        intel_client.search_importers.return_value = [make_summary("Acme Imports Inc")]
        intel_client.search_similar_importers.return_value = [make_summary("Beta Trading")]

        response = await client.post("/api/v1/search", json={"query": "led lights", "state": "CA"})

        assert response.status_code == 200
        data = response.json()
        assert data["primary"][0]["importerName"] == "Acme Imports Inc"
        assert data["similar"][0]["importerName"] == "Beta Trading"
        assert data["error"] is None

    @pytest.mark.asyncio
    async def test_blank_search_is_400(self, client, intel_client):
        response = await client.post("/api/v1/search", json={"query": " "})
        assert response.status_code == 400
        intel_client.search_importers.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_in_flight_is_409(self, client, session):
        session.search.in_flight = True
        response = await client.post("/api/v1/search", json={"query": "led lights"})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_primary_failure_reported(self, client, intel_client):
        intel_client.search_importers.side_effect = GenerationError("down")
        intel_client.search_similar_importers.return_value = [make_summary("Beta Trading")]

        data = (await client.post("/api/v1/search", json={"industry": "Electronics"})).json()

        assert data["primary"] == []
        assert data["error"] == "Could not fetch main search results."
        assert len(data["similar"]) == 1

    @pytest.mark.asyncio
    async def test_results_endpoint(self, client, intel_client):
        intel_client.search_importers.return_value = [make_summary("Acme Imports Inc")]
        await client.post("/api/v1/search", json={"query": "led lights"})
        data = (await client.get("/api/v1/search/results")).json()
        assert [s["importerName"] for s in data["primary"]] == ["Acme Imports Inc"]


# ── Active record ──


class TestImporterEndpoints:
    @pytest.mark.asyncio
    async def test_select_returns_placeholder_then_fetch_completes(self, client, intel_client):
        response = await _search_and_select(client, intel_client)

        assert response.status_code == 200
        placeholder = response.json()
        assert placeholder["status"] == "loading"
        assert placeholder["record"]["information"] == ""
        assert placeholder["record"]["importerName"] == "Acme Imports Inc"

        active = (await client.get("/api/v1/importers/active")).json()
        assert active["status"] == "full"
        assert active["record"]["information"].startswith("Acme Imports")
        assert active["contact_available"]["email"] is False
        intel_client.fetch_detailed_importer.assert_awaited_once_with("Acme Imports Inc")

    @pytest.mark.asyncio
    async def test_select_similar_result(self, client, intel_client):
        intel_client.fetch_detailed_importer.return_value = make_detail(importerName="Beta Trading")
        response = await _search_and_select(client, intel_client, name="Beta Trading")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_select_unknown_is_404(self, client, intel_client):
        response = await _search_and_select(client, intel_client, name="Nobody LLC")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_detail_failure_annotates_record(self, client, intel_client):
        intel_client.fetch_detailed_importer.side_effect = MalformedResponseError("bad")
        await _search_and_select(client, intel_client)

        active = (await client.get("/api/v1/importers/active")).json()
        assert active["status"] == "errored"
        assert active["record"]["information"].startswith("Failed to load details: ")
        assert active["record"]["location"] == "Los Angeles, CA"

    @pytest.mark.asyncio
    async def test_no_active_record_is_404(self, client):
        assert (await client.get("/api/v1/importers/active")).status_code == 404
        assert (await client.get("/api/v1/importers/active/risk")).status_code == 404

    @pytest.mark.asyncio
    async def test_close(self, client, intel_client):
        await _search_and_select(client, intel_client)
        assert (await client.delete("/api/v1/importers/active")).status_code == 204
        assert (await client.get("/api/v1/importers/active")).status_code == 404

    @pytest.mark.asyncio
    async def test_refresh_failure_keeps_record(self, client, intel_client):
        await _search_and_select(client, intel_client)
        intel_client.fetch_detailed_importer.side_effect = GenerationError("overloaded")

        data = (await client.post("/api/v1/importers/active/refresh")).json()

        assert data["started"] is True
        assert data["active"]["status"] == "full"
        assert data["active"]["refresh_error"] == "Failed to retrieve data. overloaded"

    @pytest.mark.asyncio
    async def test_refresh_while_busy_is_409(self, client, session, intel_client):
        await _search_and_select(client, intel_client)
        session.records.begin_fetch("Acme Imports Inc")
        assert (await client.post("/api/v1/importers/active/refresh")).status_code == 409

    @pytest.mark.asyncio
    async def test_history_filtered_and_sorted(self, client, intel_client):
        await _search_and_select(client, intel_client)
        data = (await client.get("/api/v1/importers/active/history", params={"order": "asc"})).json()
        assert data["total"] == 3
        assert [e["date"] for e in data["entries"]] == ["2024-09-02", "2024-10-01", "2024-11-15"]
        assert data["entries"][1]["fallback"] is True

        filtered = (await client.get("/api/v1/importers/active/history", params={"filter": "vietnam"})).json()
        assert [e["fields"]["origin"] for e in filtered["entries"]] == ["Vietnam"]

    @pytest.mark.asyncio
    async def test_risk_badges(self, client, intel_client):
        await _search_and_select(client, intel_client)
        badges = (await client.get("/api/v1/importers/active/risk")).json()
        assert [b["level"] for b in badges] == ["Low", "Medium", "High"]

    @pytest.mark.asyncio
    async def test_commodities_with_trend(self, client, intel_client):
        await _search_and_select(client, intel_client)
        flows = (await client.get("/api/v1/importers/active/commodities")).json()
        assert [f["trend"] for f in flows] == ["up", "flat"]
        assert [f["has_sparkline"] for f in flows] == [True, False]

    @pytest.mark.asyncio
    async def test_share_links(self, client, intel_client):
        await _search_and_select(client, intel_client)
        data = (await client.get("/api/v1/importers/active/share")).json()
        assert data["link"] == "https://intel.example.com/?search=Acme%20Imports%20Inc"
        assert data["mailto"].startswith("mailto:?subject=Importer%20Intel%3A%20Acme%20Imports%20Inc")

    @pytest.mark.asyncio
    async def test_exports(self, client, intel_client):
        await _search_and_select(client, intel_client)

        csv_response = await client.get("/api/v1/importers/active/export.csv")
        assert csv_response.headers["content-type"].startswith("text/csv")
        assert 'filename="Acme_Imports_Inc_intel.csv"' in csv_response.headers["content-disposition"]

        json_response = await client.get("/api/v1/importers/active/export.json")
        assert json_response.json()["importerName"] == "Acme Imports Inc"

    @pytest.mark.asyncio
    async def test_search_similar_starts_new_search(self, client, intel_client):
        await _search_and_select(client, intel_client)
        response = await client.post("/api/v1/importers/active/search-similar")
        assert response.status_code == 200
        intel_client.search_importers.assert_awaited_with("Acme Imports Inc", "", "", "")
        assert (await client.get("/api/v1/importers/active")).status_code == 404


# ── Charts ──


class TestChartEndpoints:
    @pytest.mark.asyncio
    async def test_volume_svg(self, client, intel_client):
        await _search_and_select(client, intel_client)
        response = await client.get("/api/v1/charts/volume.svg")
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.text.count("<rect") == 3

    @pytest.mark.asyncio
    async def test_volume_hover(self, client, intel_client):
        await _search_and_select(client, intel_client)
        tooltip = (await client.get("/api/v1/charts/volume/hover", params={"x": 210})).json()
        assert tooltip["year"] == 2022
        assert (await client.get("/api/v1/charts/volume/hover", params={"x": 5})).json() is None

    @pytest.mark.asyncio
    async def test_volume_hover_from_client_pointer(self, client, intel_client):
        await _search_and_select(client, intel_client)
        # chart drawn at half size: client 155 over a 250px box at left 50 is viewBox 210
        params = {"client_x": 155, "rect_left": 50, "rect_width": 250}
        tooltip = (await client.get("/api/v1/charts/volume/hover", params=params)).json()
        assert tooltip["year"] == 2022

        response = await client.get("/api/v1/charts/volume/hover", params={"client_x": 155})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_insufficient_volume_data_is_422(self, client, intel_client):
        intel_client.fetch_detailed_importer.return_value = make_detail(
            shipmentVolumeHistory=[{"year": 2024, "volume": 10}]
        )
        await _search_and_select(client, intel_client)
        response = await client.get("/api/v1/charts/volume.svg")
        assert response.status_code == 422
        assert response.json()["detail"] == "Not enough annual volume data to display a chart."

    @pytest.mark.asyncio
    async def test_sparkline(self, client, intel_client):
        await _search_and_select(client, intel_client)
        assert "<polyline" in (await client.get("/api/v1/charts/commodities/0/sparkline.svg")).text
        assert (await client.get("/api/v1/charts/commodities/1/sparkline.svg")).status_code == 204
        assert (await client.get("/api/v1/charts/commodities/9/sparkline.svg")).status_code == 404

    @pytest.mark.asyncio
    async def test_map_regions_and_unmapped(self, client, intel_client):
        await _search_and_select(client, intel_client)
        data = (await client.get("/api/v1/charts/map")).json()
        assert data["unmapped"] == ["Vietnam"]
        us = next(r for r in data["regions"] if r["name"] == "United States")
        assert us["trade_volume"] == "Low"
        assert (await client.get("/api/v1/charts/map.svg")).text.count("<path") == 8

    @pytest.mark.asyncio
    async def test_map_hover(self, client, intel_client):
        await _search_and_select(client, intel_client)
        params = {"country": "China", "pointer_x": 300, "pointer_y": 200, "left": 100, "top": 50}
        tooltip = (await client.get("/api/v1/charts/map/hover", params=params)).json()
        assert tooltip == {"country": "China", "volume": "High", "x": 200.0, "y": 150.0, "left": 215.0}

    @pytest.mark.asyncio
    async def test_map_click_searches_country(self, client, intel_client):
        await _search_and_select(client, intel_client)
        response = await client.post("/api/v1/charts/map/click", json={"country": "USA"})
        assert response.status_code == 200
        intel_client.search_importers.assert_awaited_with("United States", "", "", "")


# ── Alerts ──


class TestAlertEndpoints:
    @pytest.mark.asyncio
    async def test_subscribe_and_list(self, client):
        response = await client.post(
            "/api/v1/subscriptions", json={"companyName": "Acme Imports Inc", "email": "ops@acme.com"}
        )
        assert response.status_code == 200
        assert response.json() == {"companyName": "Acme Imports Inc", "email": "ops@acme.com"}

        await client.post("/api/v1/subscriptions", json={"companyName": "Acme Imports Inc", "email": "new@acme.com"})
        subs = (await client.get("/api/v1/subscriptions")).json()
        assert subs == [{"companyName": "Acme Imports Inc", "email": "new@acme.com"}]

    @pytest.mark.asyncio
    async def test_invalid_email_is_422(self, client):
        response = await client.post("/api/v1/subscriptions", json={"companyName": "Acme", "email": "nope"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_notifications_and_clear(self, client):
        await client.post("/api/v1/subscriptions", json={"companyName": "Acme Imports Inc", "email": "ops@acme.com"})

        data = (await client.get("/api/v1/notifications")).json()
        assert data["unread_count"] == 1
        assert data["notifications"][0]["message"] == "You are now subscribed to alerts for Acme Imports Inc."

        assert (await client.delete("/api/v1/notifications")).status_code == 204
        assert (await client.get("/api/v1/notifications")).json()["unread_count"] == 0
