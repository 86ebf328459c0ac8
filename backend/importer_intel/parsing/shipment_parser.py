"""Best-effort field mining for free-text shipment events.

Pure functions, no I/O. Each field is found by its own regular expression run
against the same sentence; there is no grammar tying them together, so any
subset of fields may come back. The stored event text is never modified.
"""

import re
from datetime import datetime, timezone
from typing import Iterable, TypedDict

from importer_intel.schemas.importer import ShipmentEvent

VOLUME_UNITS = (
    "TEUs?",
    "containers?",
    "units?",
    "kgs?",
    "tons?",
    "lbs?",
    "packages?",
    "shipments?",
    "cartons?",
    "pieces?",
)

VOLUME_RE = re.compile(
    r"(\d[\d,.]*\s*(?:" + "|".join(VOLUME_UNITS) + r"))\b",
    re.IGNORECASE,
)
ORIGIN_RE = re.compile(
    r"\b(?:originating from|originating in|from)\s+([A-Z][a-zA-Z\s,.-]+?)"
    r"(?=\s+(?:containing|of|consisting|by|supplier|via)\b|\.|$)",
    re.IGNORECASE,
)
COMMODITY_RE = re.compile(
    r"\b(?:consisting of|containing|of)\s+([a-zA-Z0-9\s,()-]+?)"
    r"(?=\s+(?:from|via|originating|by|supplier)\b|\.|$)",
    re.IGNORECASE,
)
SUPPLIER_RE = re.compile(
    r"\b(?:manufactured by|supplier|by)\s+([A-Z][a-zA-Z0-9\s,.]+?)"
    r"(?=\s+(?:via|from|of)\b|\.|$)",
    re.IGNORECASE,
)

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%B %d, %Y", "%b %d, %Y", "%d %B %Y", "%Y-%m", "%Y")


class ShipmentFields(TypedDict, total=False):
    volume: str
    origin: str
    commodity: str
    supplier: str


def _normalize(text: str) -> str:
    return re.sub(r"\.$", "", text.strip())


def _search(pattern: re.Pattern, text: str) -> str | None:
    match = pattern.search(_normalize(text))
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def extract_volume(text: str) -> str | None:
    return _search(VOLUME_RE, text)


def extract_origin(text: str) -> str | None:
    return _search(ORIGIN_RE, text)


def extract_commodity(text: str) -> str | None:
    return _search(COMMODITY_RE, text)


def extract_supplier(text: str) -> str | None:
    return _search(SUPPLIER_RE, text)


def parse_shipment_event(text: str) -> ShipmentFields:
    """Mine volume, origin, commodity and supplier from an event sentence.

    Unmatched fields are left out of the result entirely. An empty result means
    the caller should show the raw event text instead.

    >>> parse_shipment_event("Imported 15,000 KG of Widgets from China by Supplier Co.")
    {'volume': '15,000 KG', 'origin': 'China', 'commodity': 'Widgets', 'supplier': 'Supplier Co'}
    """
    fields: ShipmentFields = {}
    for key, extractor in (
        ("volume", extract_volume),
        ("origin", extract_origin),
        ("commodity", extract_commodity),
        ("supplier", extract_supplier),
    ):
        value = extractor(text)
        if value is not None:
            fields[key] = value
    return fields


# --- Display-layer transforms (never mutate the stored sequence) ---


def event_timestamp(date_text: str) -> float:
    """Seconds since the epoch for a loosely formatted date; 0 if unparsable."""
    text = (date_text or "").strip()
    if not text:
        return 0.0
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def filter_history(events: Iterable[ShipmentEvent], filter_text: str) -> list[ShipmentEvent]:
    """Keep events whose text (case-insensitive) or date contains ``filter_text``."""
    needle = (filter_text or "").strip().lower()
    if not needle:
        return list(events)
    return [e for e in events if needle in e.event.lower() or needle in e.date]


def sort_history(events: Iterable[ShipmentEvent], order: str = "desc") -> list[ShipmentEvent]:
    """Stable sort by date; ``desc`` puts the newest first."""
    return sorted(events, key=lambda e: event_timestamp(e.date), reverse=(order == "desc"))


def history_view(
    events: Iterable[ShipmentEvent],
    filter_text: str = "",
    order: str = "desc",
) -> list[dict]:
    """Filtered, sorted history with parsed fields attached to each entry."""
    view = []
    for event in sort_history(filter_history(events, filter_text), order):
        fields = parse_shipment_event(event.event)
        view.append({
            "date": event.date,
            "event": event.event,
            "fields": fields,
            "fallback": "commodity" not in fields,
        })
    return view
