
"""Shared builders for settings, model replies and importer records."""

from unittest.mock import MagicMock

from importer_intel.config import Settings
from importer_intel.schemas.importer import DetailedImporterRecord, ImporterSummary


def make_mock_settings(**overrides) -> Settings:
    values = {
        "anthropic_api_key": "test-key",
        "claude_model": "claude-sonnet-4-20250514",
        "claude_search_model": "claude-haiku-4-5-20251001",
        "claude_max_tokens": 4096,
        "public_base_url": "https://intel.example.com/",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_mock_message(content_text: str):
    """Create a mock Anthropic message response."""
    mock_content = MagicMock()
    mock_content.text = content_text
    mock_message = MagicMock()
    mock_message.content = [mock_content]
    return mock_message


def make_summary(name: str, **fields) -> ImporterSummary:
    data = {
        "importerName": name,
        "location": "Los Angeles, CA",
        "primaryCommodities": "LED fixtures",
        "lastShipmentDate": "2024-11-15",
    }
    data.update(fields)
    return ImporterSummary.model_validate(data)


SAMPLE_DETAIL = {
    "importerName": "Acme Imports Inc",
    "location": "Los Angeles, CA",
    "lastShipmentDate": "2024-11-15",
    "information": "Acme Imports is a wholesale distributor of consumer electronics.",
    "shipmentActivity": "Regular trans-Pacific lanes via Long Beach on COSCO and Maersk.",
    "shipmentCounts": {"lastMonth": 12, "lastQuarter": "38", "lastYear": 140},
    "shipmentHistory": [
        {"date": "2024-09-02", "event": "Imported 12 containers of LED fixtures from China by Shenzhen Lighting Co."},
        {"date": "2024-11-15", "event": "Imported 15,000 KG of Widgets from Vietnam by Hanoi Parts Ltd."},
        {"date": "2024-10-01", "event": "Shipment occurred."},
    ],
    "shipmentVolumeHistory": [
        {"year": 2023, "volume": 900},
        {"year": 2021, "volume": "450"},
        {"year": 2022, "volume": 1200},
    ],
    "commodities": "LED fixtures, widgets",
    "contact": {
        "phone": "+1 310 555 0100",
        "email": "N/A",
        "website": "https://acme.example.com",
        "address": "Not publicly available",
    },
    "riskAssessment": {
        "financialStability": "Financially stable with strong compliance",
        "regulatoryCompliance": "Moderate regulatory concern",
        "geopoliticalRisk": "History of sanctions violation",
    },
    "topTradePartners": [
        {"country": "China", "tradeVolume": "High"},
        {"country": "Vietnam", "tradeVolume": "150 shipments"},
        {"country": "USA", "tradeVolume": "Low"},
    ],
    "topCommodityFlows": [
        {
            "name": "LED fixtures",
            "percentage": "60%",
            "averagePrice": "$4.20/unit",
            "marketTrend": "Increasing demand",
            "topSupplier": "Shenzhen Lighting Co",
            "priceTrendData": [4.1, 4.3, 4.2],
            "importVolumeTrendData": [100, 120, 90, 140],
        },
        {"name": "Widgets", "percentage": "40%", "marketTrend": "Stable"},
    ],
}


def make_detail(**overrides) -> DetailedImporterRecord:
    data = {**SAMPLE_DETAIL, **overrides}
    return DetailedImporterRecord.model_validate(data)


