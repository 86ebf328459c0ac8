"""Importer record schemas.

Field aliases follow the JSON shapes the generative collaborator is asked to
return (camelCase), so ``model_dump(by_alias=True)`` round-trips the wire format.
The empty string is the "not yet loaded" sentinel for every text field.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

_NUMBER_RE = re.compile(r"-?\d[\d,]*(?:\.\d+)?")

# Values the model uses to say "we looked and found nothing"
UNAVAILABLE_MARKERS = {"", "n/a", "not publicly available"}


class LenientModel(BaseModel):
    """Base model that treats explicit nulls as missing so defaults apply."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


def _lenient_list(model: type[BaseModel], value: Any) -> list:
    """Validate each item independently, dropping the ones that don't fit."""
    if not isinstance(value, list):
        return []
    items = []
    for raw in value:
        try:
            items.append(model.model_validate(raw))
        except ValidationError:
            continue
    return items


# --- Search results ---


class ImporterSummary(LenientModel):
    """Lightweight importer listing returned by a search. Keyed by name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., alias="importerName", min_length=1)
    location: str = ""
    primary_commodities: str = Field("", alias="primaryCommodities")
    last_shipment_date: str = Field("", alias="lastShipmentDate")
    contact_information: str | None = Field(None, alias="contactInformation")
    source: str | None = None


class RawLead(LenientModel):
    """Loosely-typed lead produced by one of the scrapers."""

    importer: str = ""
    cnee: str | None = None
    commodity: str | None = None
    hs_code: str | None = Field(None, alias="hsCode")
    origin: str | None = None
    destination: str | None = None
    last_shipment_date: str | None = Field(None, alias="lastShipmentDate")
    weight: str | None = None
    container_count: str | None = Field(None, alias="containerCount")
    source: str
    url: str | None = None


# --- Detailed record sub-models ---


class ShipmentEvent(LenientModel):
    date: str = ""
    event: str = ""

    @model_validator(mode="before")
    @classmethod
    def _compose_event(cls, data: Any) -> Any:
        # Bill-of-lading style entries come back without an event sentence
        if not isinstance(data, dict) or data.get("event"):
            return data
        parts = []
        if data.get("volume"):
            parts.append(str(data["volume"]))
        if data.get("commodity"):
            parts.append(f"of {data['commodity']}")
        if data.get("origin"):
            parts.append(f"from {data['origin']}")
        if data.get("shipper"):
            parts.append(f"by {data['shipper']}")
        if parts:
            data = {**data, "event": "Imported " + " ".join(parts)}
        return data


class ShipmentVolume(BaseModel):
    year: int
    volume: float = Field(allow_inf_nan=False)

    @field_validator("year", "volume", mode="before")
    @classmethod
    def _parse_number(cls, v: Any) -> Any:
        if isinstance(v, str):
            match = _NUMBER_RE.search(v)
            if match:
                return match.group(0).replace(",", "")
        return v


class ShipmentCounts(LenientModel):
    last_month: int | float | str = Field("", alias="lastMonth")
    last_quarter: int | float | str = Field("", alias="lastQuarter")
    last_year: int | float | str = Field("", alias="lastYear")


class ContactInfo(LenientModel):
    phone: str = ""
    website: str = ""
    email: str = ""
    address: str | None = None

    def available(self) -> dict[str, bool]:
        """Which contact channels carry a real value."""
        return {
            name: (getattr(self, name) or "").strip().lower() not in UNAVAILABLE_MARKERS
            for name in ("phone", "email", "website", "address")
        }

    @property
    def has_any(self) -> bool:
        return any(self.available().values())


class RiskAssessment(LenientModel):
    financial_stability: str = Field("", alias="financialStability")
    regulatory_compliance: str = Field("", alias="regulatoryCompliance")
    geopolitical_risk: str = Field("", alias="geopoliticalRisk")


class TradePartner(LenientModel):
    country: str
    trade_volume: str = Field("", alias="tradeVolume")


class CommodityFlow(LenientModel):
    name: str
    percentage: str = ""
    average_price: str | None = Field(None, alias="averagePrice")
    market_trend: str | None = Field(None, alias="marketTrend")
    top_supplier: str | None = Field(None, alias="topSupplier")
    price_trend_data: list[float] | None = Field(None, alias="priceTrendData")
    import_volume_trend_data: list[float] | None = Field(None, alias="importVolumeTrendData")

    @field_validator("price_trend_data", "import_volume_trend_data", mode="before")
    @classmethod
    def _numeric_series(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return None
        series = []
        for item in v:
            if isinstance(item, (int, float)) and not isinstance(item, bool):
                series.append(item)
            elif isinstance(item, str) and _NUMBER_RE.search(item):
                series.append(_NUMBER_RE.search(item).group(0).replace(",", ""))
        return series


# --- Detailed record ---


class DetailedImporterRecord(LenientModel):
    """Full enrichment profile for one importer.

    Sequences keep the order the data source returned; any sorting is done on
    copies at display time.
    """

    name: str = Field(..., alias="importerName")
    location: str = ""
    last_shipment_date: str = Field("", alias="lastShipmentDate")
    information: str = ""
    shipment_activity_summary: str = Field("", alias="shipmentActivity")
    shipment_counts: ShipmentCounts = Field(default_factory=ShipmentCounts, alias="shipmentCounts")
    shipment_history: list[ShipmentEvent] = Field(default_factory=list, alias="shipmentHistory")
    shipment_volume_history: list[ShipmentVolume] = Field(
        default_factory=list, alias="shipmentVolumeHistory"
    )
    commodities: str = ""
    contact: ContactInfo | str = Field(default_factory=ContactInfo)
    risk_assessment: RiskAssessment = Field(default_factory=RiskAssessment, alias="riskAssessment")
    top_trade_partners: list[TradePartner] = Field(default_factory=list, alias="topTradePartners")
    top_commodity_flows: list[CommodityFlow] = Field(default_factory=list, alias="topCommodityFlows")

    @field_validator("shipment_history", mode="before")
    @classmethod
    def _history(cls, v: Any) -> list:
        return _lenient_list(ShipmentEvent, v)

    @field_validator("shipment_volume_history", mode="before")
    @classmethod
    def _volumes(cls, v: Any) -> list:
        return _lenient_list(ShipmentVolume, v)

    @field_validator("top_trade_partners", mode="before")
    @classmethod
    def _partners(cls, v: Any) -> list:
        return _lenient_list(TradePartner, v)

    @field_validator("top_commodity_flows", mode="before")
    @classmethod
    def _flows(cls, v: Any) -> list:
        return _lenient_list(CommodityFlow, v)

    @field_validator("shipment_counts", "risk_assessment", mode="before")
    @classmethod
    def _object_or_empty(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else {}

    @field_validator("contact", mode="before")
    @classmethod
    def _contact(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, str)) else {}

    @property
    def is_loaded(self) -> bool:
        return bool(self.information)

    @classmethod
    def placeholder(cls, summary: ImporterSummary) -> "DetailedImporterRecord":
        """Loading-state record carrying only what the summary already knows."""
        return cls(
            name=summary.name,
            location=summary.location,
            last_shipment_date=summary.last_shipment_date,
            commodities=summary.primary_commodities,
        )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
