"""Keyword heuristics for risk badges and market-trend arrows."""

import enum
import re
from dataclasses import dataclass

from importer_intel.schemas.importer import RiskAssessment


class RiskLevel(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    UNKNOWN = "Unknown"


class MarketTrend(str, enum.Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"
    NONE = "none"


# Checked in order, first match wins. "low" is ambiguous: "low risk" is
# caught by the first set before the bare word reaches the last one.
RISK_RULES: list[tuple[re.Pattern, RiskLevel, str]] = [
    (re.compile(r"\b(high|strong|good|stable|compliant|low risk)\b"), RiskLevel.LOW, "success"),
    (re.compile(r"\b(medium|moderate|some concern|monitored|adequate)\b"), RiskLevel.MEDIUM, "warning"),
    (re.compile(r"\b(low|poor|unstable|violation|sanction|high risk|negative)\b"), RiskLevel.HIGH, "danger"),
]


@dataclass(frozen=True)
class RiskRating:
    level: RiskLevel
    tier: str  # success, warning, danger, neutral

    @property
    def label(self) -> str:
        return f"{self.level.value} Risk"


UNKNOWN_RATING = RiskRating(RiskLevel.UNKNOWN, "neutral")


def classify_risk(text: str) -> RiskRating:
    lower = (text or "").lower()
    for pattern, level, tier in RISK_RULES:
        if pattern.search(lower):
            return RiskRating(level, tier)
    return UNKNOWN_RATING


def classify_assessment(assessment: RiskAssessment) -> list[dict]:
    """Badge data for the three risk dimensions, in display order."""
    items = [
        ("Financial Stability", assessment.financial_stability),
        ("Regulatory Compliance", assessment.regulatory_compliance),
        ("Geopolitical Risk", assessment.geopolitical_risk),
    ]
    result = []
    for title, content in items:
        rating = classify_risk(content)
        result.append({
            "title": title,
            "content": content,
            "level": rating.level.value,
            "tier": rating.tier,
            "label": rating.label,
        })
    return result


def classify_trend(text: str | None) -> MarketTrend:
    lower = (text or "").lower()
    if "increasing" in lower:
        return MarketTrend.UP
    if "decreasing" in lower:
        return MarketTrend.DOWN
    if "stable" in lower:
        return MarketTrend.FLAT
    return MarketTrend.NONE
