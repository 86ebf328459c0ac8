"""Pydantic schemas for the search endpoints."""

from pydantic import BaseModel

from importer_intel.schemas.importer import ImporterSummary


class SearchRequest(BaseModel):
    query: str = ""
    city: str = ""
    state: str = ""
    industry: str = ""


class SearchResponse(BaseModel):
    primary: list[ImporterSummary]
    similar: list[ImporterSummary]
    error: str | None = None
    in_flight: bool = False
