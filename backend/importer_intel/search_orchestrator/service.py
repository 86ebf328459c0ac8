"""SearchOrchestrator: runs the primary and similar searches side by side.

The primary result is the contract: its failure is shown to the user. The
similar list is an enhancement: its failure quietly leaves the list empty.
Both lists are replaced, never merged, on every search.
"""

import asyncio
import logging
from dataclasses import dataclass

from importer_intel.errors import SearchRejected
from importer_intel.record_store.store import ImporterRecordStore
from importer_intel.schemas.importer import ImporterSummary
from importer_intel.services.intel_client import ImporterIntelClient

logger = logging.getLogger("intel.search")

PRIMARY_SEARCH_ERROR = "Could not fetch main search results."


@dataclass(frozen=True)
class SearchQuery:
    query: str = ""
    city: str = ""
    state: str = ""
    industry: str = ""

    @property
    def is_blank(self) -> bool:
        return not any(v.strip() for v in (self.query, self.city, self.state, self.industry))

    def similar_query(self) -> str:
        """The trimmed main query, or else "industry, city, state" from what is set."""
        if self.query.strip():
            return self.query.strip()
        return ", ".join(v.strip() for v in (self.industry, self.city, self.state) if v.strip())


@dataclass(frozen=True)
class SearchOutcome:
    primary: list[ImporterSummary]
    similar: list[ImporterSummary]
    error: str | None = None


class SearchOrchestrator:
    def __init__(self, client: ImporterIntelClient, records: ImporterRecordStore | None = None):
        self.client = client
        self.records = records
        self.primary: list[ImporterSummary] = []
        self.similar: list[ImporterSummary] = []
        self.error: str | None = None
        self.in_flight = False
        self.last_query: SearchQuery | None = None

    async def search(
        self, query: str = "", city: str = "", state: str = "", industry: str = ""
    ) -> SearchOutcome:
        """Run a search and replace both result lists.

        Raises:
            SearchRejected: every input is blank, or a search is already running.
        """
        request = SearchQuery(query=query, city=city, state=state, industry=industry)
        if request.is_blank:
            raise SearchRejected(SearchRejected.BLANK)
        if self.in_flight:
            raise SearchRejected(SearchRejected.IN_FLIGHT)

        self.in_flight = True
        self.last_query = request
        self.primary = []
        self.similar = []
        self.error = None
        if self.records is not None:
            self.records.close()

        try:
            primary, similar = await asyncio.gather(
                self.client.search_importers(query, city, state, industry),
                self.client.search_similar_importers(request.similar_query()),
                return_exceptions=True,
            )
        finally:
            self.in_flight = False

        if isinstance(primary, BaseException):
            logger.error("Primary search failed: %s", primary)
            self.error = PRIMARY_SEARCH_ERROR
        else:
            self.primary = primary

        if isinstance(similar, BaseException):
            logger.warning("Similar search failed: %s", similar)
        else:
            self.similar = similar

        logger.info(
            "Search %r: %d primary, %d similar", request.query, len(self.primary), len(self.similar)
        )
        return self.outcome()

    async def search_similar_to(self, name: str) -> SearchOutcome:
        """Start over with ``name`` as the only search input."""
        return await self.search(query=name)

    def outcome(self) -> SearchOutcome:
        return SearchOutcome(primary=list(self.primary), similar=list(self.similar), error=self.error)

    def find_summary(self, name: str) -> ImporterSummary | None:
        for summary in (*self.primary, *self.similar):
            if summary.name == name:
                return summary
        return None
