"""
Best-effort scrapers for public trade-data pages.

Every scraper is expected to fail often (blocking, markup changes, timeouts).
Failures are logged and the scraper returns whatever it collected, usually an
empty list. Callers treat the leads as a hint for the model, never as truth.
"""

import asyncio
import logging

import httpx
from bs4 import BeautifulSoup

from importer_intel.config import Settings
from importer_intel.schemas.importer import RawLead

logger = logging.getLogger("intel.scraper")

IMPORT_YETI_URL = "https://www.importyeti.com/search"
ALIBABA_BUYERS_URL = "https://www.alibaba.com/trade/search"
INDIA_HS_URL = "https://api.cbic-gov.in/public/hs"
PORT_OF_LA_URL = "https://www.portoflosangeles.org/api/vessel_schedule"


class ShipmentScraper:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.timeout = settings.scrape_timeout_seconds
        self.user_agent = settings.scrape_user_agent
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
            transport=self.transport,
        )

    async def _get(self, url: str, params: dict | None = None) -> httpx.Response:
        async with self._client() as client:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
            return resp

    async def scrape_import_yeti(self, query: str) -> list[RawLead]:
        """Company results from the ImportYeti search page."""
        leads: list[RawLead] = []
        try:
            resp = await self._get(IMPORT_YETI_URL, params={"q": query})
            soup = BeautifulSoup(resp.text, "html.parser")
            for el in soup.select(".company-result"):
                name = el.select_one(".company-name")
                products = el.select_one(".product-list")
                leads.append(RawLead(
                    importer=name.get_text(strip=True) if name else "",
                    commodity=products.get_text(strip=True) if products else "",
                    source="ImportYeti",
                    url=str(resp.url),
                ))
        except httpx.HTTPError as e:
            logger.warning("ImportYeti scrape failed: %s", e)
        return leads

    async def scrape_alibaba_buyers(self, keyword: str) -> list[RawLead]:
        """Buyer cards from an Alibaba trade search."""
        leads: list[RawLead] = []
        try:
            resp = await self._get(ALIBABA_BUYERS_URL, params={"keywords": keyword})
            soup = BeautifulSoup(resp.text, "html.parser")
            for el in soup.select(".supplier-card"):
                name = el.select_one(".supplier-name")
                leads.append(RawLead(
                    importer=name.get_text(strip=True) if name else "",
                    commodity=keyword,
                    source="Alibaba Buyers",
                    url=str(resp.url),
                ))
        except httpx.HTTPError as e:
            logger.warning("Alibaba scrape failed: %s", e)
        return leads

    async def scrape_indian_hs_code(self, hs: str) -> list[RawLead]:
        """Importer records for an HS code from the Indian customs API."""
        leads: list[RawLead] = []
        try:
            resp = await self._get(INDIA_HS_URL, params={"code": hs})
            for item in resp.json().get("records") or []:
                leads.append(RawLead(
                    importer=item.get("importer") or "",
                    hs_code=hs,
                    origin=item.get("country"),
                    last_shipment_date=item.get("date"),
                    source="India Customs API",
                ))
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning("Indian HS code scrape failed: %s", e)
        return leads

    async def scrape_port_of_la(self) -> list[RawLead]:
        """Vessel arrivals at the Port of Los Angeles."""
        leads: list[RawLead] = []
        try:
            resp = await self._get(PORT_OF_LA_URL)
            data = resp.json()
            if isinstance(data, list):
                for vessel in data:
                    leads.append(RawLead(
                        importer="",
                        commodity="",
                        origin=vessel.get("lastPort"),
                        destination="Los Angeles",
                        last_shipment_date=vessel.get("arrival"),
                        source="Port of LA",
                    ))
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning("Port of LA scrape failed: %s", e)
        return leads

    async def gather_leads(self, query: str) -> list[RawLead]:
        """Run the query scrapers concurrently and keep whatever succeeded."""
        if not query.strip():
            return []

        results = await asyncio.gather(
            self.scrape_import_yeti(query),
            self.scrape_alibaba_buyers(query),
            return_exceptions=True,
        )

        leads: list[RawLead] = []
        for result in results:
            if isinstance(result, BaseException):
                logger.warning("Scraper raised unexpectedly: %s", result)
                continue
            leads.extend(result)
        logger.info("Collected %d scraped leads for %r", len(leads), query)
        return leads
