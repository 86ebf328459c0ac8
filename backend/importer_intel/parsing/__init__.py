from importer_intel.parsing.risk import RiskLevel, RiskRating, classify_assessment, classify_risk, classify_trend
from importer_intel.parsing.shipment_parser import history_view, parse_shipment_event

__all__ = [
    "RiskLevel",
    "RiskRating",
    "classify_assessment",
    "classify_risk",
    "classify_trend",
    "history_view",
    "parse_shipment_event",
]
