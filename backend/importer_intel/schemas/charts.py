"""Pydantic schemas for chart and map interaction endpoints."""

from pydantic import BaseModel


class BarTooltipResponse(BaseModel):
    year: int
    volume: float
    x: float
    y: float
    left_pct: float
    top_pct: float


class MapRegionResponse(BaseModel):
    name: str
    fill: str
    trade_volume: str | None = None


class TradeMapResponse(BaseModel):
    regions: list[MapRegionResponse]
    unmapped: list[str]
    legend: list[dict[str, str]]


class MapTooltipResponse(BaseModel):
    country: str
    volume: str
    x: float
    y: float
    left: float


class MapClickRequest(BaseModel):
    country: str
