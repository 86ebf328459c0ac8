"""
Importer search and enrichment on top of the generative collaborator.

Three operations, each a prompt → raw text → sanitized JSON → schema pass:

- search_importers: scrape (best effort), grounded search pass, cleaning pass.
- fetch_detailed_importer: one grounded pass; failures are user visible.
- search_similar_importers: secondary lookup; every failure becomes [].
"""

import json
import logging

from pydantic import ValidationError

from importer_intel.config import Settings
from importer_intel.errors import GenerationError, MalformedResponseError
from importer_intel.schemas.importer import DetailedImporterRecord, ImporterSummary, RawLead
from importer_intel.services.generative import GenerativeService
from importer_intel.services.sanitizer import extract_json, extract_json_or_empty
from importer_intel.services.scraper import ShipmentScraper

logger = logging.getLogger("intel.client")

SEARCH_PROMPT = """Act as a master trade data scraper. Find USA-based importers matching: "{query}"{filters}.

SEARCH STRATEGY (run these searches):
1. Search "list of importers of {topic} in USA".
2. Search "buyers of {topic} USA customs data".
3. Search site:tradeindata.com "{query}".
4. Search site:importyeti.com "{query}".
5. Search site:panjiva.com "{query}".
6. Search site:52wmb.com "{query}".

For each distinct company found, extract:
- Company Name (Legal Entity)
- Location (City, State)
- Exact Products Imported (be specific from BOL descriptions)
- Latest shipment date (look for "last shipment", "recent activity")
- Any contact info visible in snippets.

Combine this with any provided scraped data: {leads}

Deduplicate and return a JSON list."""

CLEANING_PROMPT = """You are a data aggregator. Combine the search results below into a single unique list of USA importers.

Rules:
1. Deduplicate based on company name.
2. Prioritize data from tradeindata.com if available.
3. Ensure "lastShipmentDate" is populated if possible.
4. Format as JSON.

Data Input:
{search_results}

Required Output JSON Structure:
{{
  "importers": [
    {{
      "importerName": "string",
      "location": "string (City, State)",
      "primaryCommodities": "string",
      "lastShipmentDate": "string (YYYY-MM-DD or 'Recent')",
      "contactInformation": "string (optional)",
      "source": "string (e.g. 'TradeInData', 'ImportYeti', 'Panjiva')"
    }}
  ]
}}"""

DETAIL_PROMPT = """Act as a Senior Trade Compliance Analyst. Retrieve detailed US Customs (CBP), Automated Manifest System (AMS) and ACE data summaries for the US importer: '{name}'.

SEARCH INSTRUCTIONS:
1. Search site:tradeindata.com for this importer's records, e.g. "site:tradeindata.com {name} bill of lading shipments".
2. If data is incomplete, check Panjiva, ImportGenius, 52wmb, Seair, Volza.
3. Find the company's official website, LinkedIn or business directory listings for email, phone and registered address.
4. From bills of lading, find the foreign shipper, origin, US port of discharge, carrier, HS code and volume.
5. Find the total number of shipments (last 12 months) and total volume (TEUs or weight).

Describe each shipment in "event" as one sentence such as
"Imported 12 containers of LED fixtures from China by Shenzhen Lighting Co via Long Beach".

Output the result as a valid JSON object. Do not include any markdown formatting. Return ONLY the raw JSON.
Structure:
{{
  "importerName": "string",
  "location": "string",
  "lastShipmentDate": "string (e.g. '2024-11-15')",
  "information": "string (business summary using CBP/AMS context)",
  "shipmentActivity": "string (summary of trade lanes, carriers and supply chain partners)",
  "shipmentCounts": {{ "lastMonth": "string/number", "lastQuarter": "string/number", "lastYear": "string/number" }},
  "shipmentHistory": [ {{ "date": "YYYY-MM-DD", "event": "string" }} ],
  "shipmentVolumeHistory": [ {{ "year": number, "volume": number }} ],
  "commodities": "string",
  "contact": {{ "phone": "string", "email": "string", "website": "string", "address": "string" }},
  "riskAssessment": {{ "financialStability": "string", "regulatoryCompliance": "string", "geopoliticalRisk": "string" }},
  "topTradePartners": [ {{ "country": "string", "tradeVolume": "string (e.g. 'High', '150 shipments', '2000 TEU')" }} ],
  "topCommodityFlows": [
    {{
      "name": "string",
      "percentage": "string",
      "averagePrice": "string (optional)",
      "marketTrend": "string (optional)",
      "topSupplier": "string (optional)",
      "priceTrendData": [number],
      "importVolumeTrendData": [number]
    }}
  ]
}}"""

SIMILAR_PROMPT = """Find {count} similar or related USA-based importers based on the query: "{query}".
Search for records on www.tradeindata.com and global trade intelligence platforms.

Output the result as a valid JSON object. Do not include any markdown formatting. Return ONLY the raw JSON.
Structure:
{{
  "importers": [
    {{
      "importerName": "string",
      "location": "string",
      "primaryCommodities": "string",
      "lastShipmentDate": "string"
    }}
  ]
}}"""


def _filters(city: str, state: str, industry: str) -> str:
    parts = []
    if city.strip():
        parts.append(f" in {city.strip()}")
    if state.strip():
        parts.append(f" in {state.strip()}")
    if industry.strip():
        parts.append(f" industry: {industry.strip()}")
    return "".join(parts)


def _summaries(data: dict) -> list[ImporterSummary]:
    """Validate the ``importers`` list, skipping entries that don't fit."""
    raw = data.get("importers")
    if not isinstance(raw, list):
        return []
    summaries = []
    for item in raw:
        try:
            summaries.append(ImporterSummary.model_validate(item))
        except ValidationError as e:
            logger.debug("Skipping importer entry: %s", e)
    return summaries


class ImporterIntelClient:
    """Search and enrichment calls used by the dashboard."""

    def __init__(
        self,
        settings: Settings,
        generative: GenerativeService | None = None,
        scraper: ShipmentScraper | None = None,
    ):
        self.generative = generative or GenerativeService(settings)
        self.scraper = scraper or ShipmentScraper(settings)
        self.search_model = settings.claude_search_model
        self.max_leads = settings.max_scraped_leads_in_prompt
        self.similar_count = settings.similar_importer_count

    def build_search_prompt(
        self, query: str, city: str, state: str, industry: str, leads: list[RawLead]
    ) -> str:
        lead_dicts = [lead.model_dump(by_alias=True, exclude_none=True) for lead in leads[: self.max_leads]]
        return SEARCH_PROMPT.format(
            query=query,
            filters=_filters(city, state, industry),
            topic=query or industry,
            leads=json.dumps(lead_dicts),
        )

    async def search_importers(
        self, query: str, city: str = "", state: str = "", industry: str = ""
    ) -> list[ImporterSummary]:
        """Primary search.

        Malformed replies degrade to an empty list. A failed model call is
        raised so the caller can tell the user the search did not run.
        """
        leads = await self.scraper.gather_leads(query)

        search_text = await self.generative.generate(
            self.build_search_prompt(query, city, state, industry, leads),
            web_search_enabled=True,
        )
        final_text = await self.generative.generate(
            CLEANING_PROMPT.format(search_results=search_text),
            web_search_enabled=False,
            model=self.search_model,
        )

        try:
            data = extract_json(final_text)
        except MalformedResponseError:
            logger.error("Primary search reply was not JSON; returning no results")
            return []
        summaries = _summaries(data)
        logger.info("Primary search %r returned %d importers", query, len(summaries))
        return summaries

    async def fetch_detailed_importer(self, name: str) -> DetailedImporterRecord:
        """Full profile for one importer.

        Raises:
            MalformedResponseError: the reply held no usable record.
            GenerationError: the model call failed.
        """
        text = await self.generative.generate(DETAIL_PROMPT.format(name=name), web_search_enabled=True)
        data = extract_json(text or "{}")
        if not data:
            raise MalformedResponseError("empty response")

        if not data.get("importerName"):
            data["importerName"] = name
        try:
            return DetailedImporterRecord.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(str(e)) from e

    async def search_similar_importers(self, query: str) -> list[ImporterSummary]:
        """Related importers for ``query``. Never raises."""
        try:
            text = await self.generative.generate(
                SIMILAR_PROMPT.format(count=self.similar_count, query=query),
                web_search_enabled=True,
                model=self.search_model,
            )
        except GenerationError as e:
            logger.warning("Similar importer search failed: %s", e)
            return []
        return _summaries(extract_json_or_empty(text))
