"""Pydantic schemas for the active importer record endpoints."""

from pydantic import BaseModel

from importer_intel.schemas.importer import DetailedImporterRecord


class SelectRequest(BaseModel):
    name: str


class ActiveRecordResponse(BaseModel):
    target: str
    status: str  # loading, partial, full, errored
    record: DetailedImporterRecord
    error: str | None = None
    refreshing: bool = False
    refresh_error: str | None = None
    contact_available: dict[str, bool] | None = None


class RefreshResponse(BaseModel):
    started: bool
    active: ActiveRecordResponse


class HistoryEntry(BaseModel):
    date: str
    event: str
    fields: dict[str, str]
    fallback: bool  # no commodity parsed, show the raw event text


class HistoryResponse(BaseModel):
    entries: list[HistoryEntry]
    total: int


class RiskBadge(BaseModel):
    title: str
    content: str
    level: str
    tier: str  # success, warning, danger, neutral
    label: str


class CommodityFlowView(BaseModel):
    index: int
    name: str
    percentage: str
    average_price: str | None = None
    top_supplier: str | None = None
    market_trend: str | None = None
    trend: str  # up, down, flat, none
    has_sparkline: bool


class ShareResponse(BaseModel):
    link: str
    mailto: str

