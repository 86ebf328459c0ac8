"""Exports and share links for the active importer record."""

import csv
import io
import json
import re
from urllib.parse import quote

from importer_intel.schemas.importer import ContactInfo, DetailedImporterRecord

CSV_HEADERS = [
    "Importer Name", "Location", "Last Shipment Date", "Information", "Shipment Activity",
    "Phone", "Email", "Website", "Address",
    "Shipments (Last Month)", "Shipments (Last Quarter)", "Shipments (Last Year)",
    "Volume History",
    "Financial Stability", "Regulatory Compliance", "Geopolitical Risk",
    "Top Trade Partners", "Top Commodity Flows",
]

_WHITESPACE_RE = re.compile(r"\s+")


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def export_filename(name: str, extension: str) -> str:
    """``Acme Imports Inc`` → ``Acme_Imports_Inc_intel.csv``"""
    return f"{_WHITESPACE_RE.sub('_', name)}_intel.{extension}"


def export_csv(record: DetailedImporterRecord) -> str:
    """Header row plus one row for ``record``. Every cell is quoted."""
    contact = record.contact
    if isinstance(contact, ContactInfo):
        phone, email, website, address = contact.phone, contact.email, contact.website, contact.address or ""
    else:
        phone = email = website = address = "N/A"

    volume_history = "; ".join(
        f"{v.year}: {_number(v.volume)} TEU" for v in record.shipment_volume_history
    )
    partners = "; ".join(f"{p.country} ({p.trade_volume})" for p in record.top_trade_partners)
    flows = "; ".join(f"{c.name} ({c.percentage})" for c in record.top_commodity_flows)
    counts = record.shipment_counts
    risk = record.risk_assessment

    row = [
        record.name, record.location, record.last_shipment_date, record.information,
        record.shipment_activity_summary,
        phone, email, website, address,
        counts.last_month, counts.last_quarter, counts.last_year,
        volume_history,
        risk.financial_stability, risk.regulatory_compliance, risk.geopolitical_risk,
        partners, flows,
    ]

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerow(row)
    return buf.getvalue()


def export_json(record: DetailedImporterRecord) -> str:
    return json.dumps(record.to_wire(), indent=2)


def share_link(base_url: str, name: str) -> str:
    return f"{base_url}?search={quote(name, safe='')}"


def mailto_link(base_url: str, name: str) -> str:
    link = share_link(base_url, name)
    subject = f"Importer Intel: {name}"
    body = f"Check out this importer profile for {name} on Global Importer Intel:\n\n{link}"
    return f"mailto:?subject={quote(subject, safe='')}&body={quote(body, safe='')}"
