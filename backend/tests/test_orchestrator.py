"""Tests for SearchOrchestrator: guards, partial failure and list replacement."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from factories import make_summary
from importer_intel.errors import GenerationError, SearchRejected
from importer_intel.record_store.store import ImporterRecordStore
from importer_intel.search_orchestrator.service import (
    PRIMARY_SEARCH_ERROR,
    SearchOrchestrator,
    SearchQuery,
)


def _client(primary=None, similar=None):
    client = MagicMock()
    client.search_importers = AsyncMock(return_value=primary or [])
    client.search_similar_importers = AsyncMock(return_value=similar or [])
    return client


class TestSearchQuery:
    def test_blank(self):
        assert SearchQuery(query="  ", city="", state="\t", industry="").is_blank
        assert not SearchQuery(state="CA").is_blank

    def test_similar_query_prefers_trimmed_main_query(self):
        assert SearchQuery(query="  LED lights ", city="Austin").similar_query() == "LED lights"

    def test_similar_query_joins_industry_city_state(self):
        query = SearchQuery(city="Austin", state="TX", industry="Electronics")
        assert query.similar_query() == "Electronics, Austin, TX"

    def test_similar_query_skips_blank_parts(self):
        assert SearchQuery(city=" ", state="TX").similar_query() == "TX"


class TestSearch:
    @pytest.mark.asyncio
    async def test_all_blank_is_rejected(self):
        client = _client()
        orchestrator = SearchOrchestrator(client)
        with pytest.raises(SearchRejected) as exc:
            await orchestrator.search("", " ", "", "")
        assert exc.value.reason == SearchRejected.BLANK
        client.search_importers.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_results_replace_previous_lists(self):
        client = _client([make_summary("Acme Imports Inc")], [make_summary("Beta Trading")])
        orchestrator = SearchOrchestrator(client)
        await orchestrator.search("led lights")

        client.search_importers.return_value = [make_summary("Gamma Goods")]
        client.search_similar_importers.return_value = []
        outcome = await orchestrator.search("glassware")

        assert [s.name for s in outcome.primary] == ["Gamma Goods"]
        assert outcome.similar == []
        assert orchestrator.last_query.query == "glassware"

    @pytest.mark.asyncio
    async def test_derived_similar_query_is_used(self):
        client = _client()
        orchestrator = SearchOrchestrator(client)
        await orchestrator.search("", "Austin", "TX", "Electronics")
        client.search_importers.assert_awaited_once_with("", "Austin", "TX", "Electronics")
        client.search_similar_importers.assert_awaited_once_with("Electronics, Austin, TX")

    @pytest.mark.asyncio
    async def test_primary_failure_with_similar_success(self):
        client = _client(similar=[make_summary("Beta Trading")])
        client.search_importers.side_effect = GenerationError("connection reset")
        orchestrator = SearchOrchestrator(client)

        outcome = await orchestrator.search("led lights")

        assert outcome.primary == []
        assert outcome.error == PRIMARY_SEARCH_ERROR
        assert [s.name for s in outcome.similar] == ["Beta Trading"]
        assert orchestrator.in_flight is False

    @pytest.mark.asyncio
    async def test_similar_failure_is_silent(self):
        client = _client(primary=[make_summary("Acme Imports Inc")])
        client.search_similar_importers.side_effect = RuntimeError("boom")
        orchestrator = SearchOrchestrator(client)

        outcome = await orchestrator.search("led lights")

        assert outcome.error is None
        assert outcome.similar == []
        assert len(outcome.primary) == 1

    @pytest.mark.asyncio
    async def test_second_search_while_in_flight_is_rejected(self):
        release = asyncio.Event()

        async def slow_search(*args):
            await release.wait()
            return [make_summary("Acme Imports Inc")]

        client = _client()
        client.search_importers = AsyncMock(side_effect=slow_search)
        orchestrator = SearchOrchestrator(client)

        first = asyncio.create_task(orchestrator.search("led lights"))
        await asyncio.sleep(0)
        assert orchestrator.in_flight is True
        with pytest.raises(SearchRejected) as exc:
            await orchestrator.search("glassware")
        assert exc.value.reason == SearchRejected.IN_FLIGHT

        release.set()
        outcome = await first
        assert len(outcome.primary) == 1
        assert client.search_importers.await_count == 1

    @pytest.mark.asyncio
    async def test_new_search_closes_active_record(self):
        records = ImporterRecordStore()
        records.select(make_summary("Acme Imports Inc"))
        orchestrator = SearchOrchestrator(_client(), records)
        await orchestrator.search("glassware")
        assert records.active is None


class TestLookups:
    @pytest.mark.asyncio
    async def test_find_summary_checks_primary_then_similar(self):
        client = _client([make_summary("Acme Imports Inc")], [make_summary("Beta Trading")])
        orchestrator = SearchOrchestrator(client)
        await orchestrator.search("led lights")

        assert orchestrator.find_summary("Acme Imports Inc").name == "Acme Imports Inc"
        assert orchestrator.find_summary("Beta Trading").name == "Beta Trading"
        assert orchestrator.find_summary("Nobody LLC") is None

    @pytest.mark.asyncio
    async def test_search_similar_to_resets_filters(self):
        client = _client()
        orchestrator = SearchOrchestrator(client)
        await orchestrator.search("", "Austin", "TX", "")
        await orchestrator.search_similar_to("Acme Imports Inc")
        client.search_importers.assert_awaited_with("Acme Imports Inc", "", "", "")
        assert orchestrator.last_query == SearchQuery(query="Acme Imports Inc")
