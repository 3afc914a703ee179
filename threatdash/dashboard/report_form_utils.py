"""Helpers for the report generator form in the dashboard."""

from __future__ import annotations

import re
from datetime import date
from typing import Any

from threatdash.utils.text import format_date, truncate_followed_by_dots

_FILENAME_PATTERN = re.compile(r'filename="?([^";]+)"?', flags=re.IGNORECASE)

FALLBACK_FORMAT = "executive"
IOC_FORMAT = "ioc"
THREAT_INTELLIGENCE_DOMAIN = "threat-intelligence"
BCM_DOMAIN = "bcm"

BASE_PREVIEW_SECTIONS = [
    "Executive summary",
    "Key findings & metrics",
    "Risk assessment",
    "Recommendations",
]


def choices_to_labels(choices: list[dict[str, Any]]) -> dict[str, str]:
    """Map option values to their display labels, skipping malformed rows."""
    labels: dict[str, str] = {}
    for row in choices:
        if not isinstance(row, dict):
            continue
        value = str(row.get("value") or "").strip()
        if value:
            labels[value] = str(row.get("label") or value)
    return labels


def format_choices_for_domain(options_payload: dict[str, Any], domain: str) -> dict[str, str]:
    """Return value->label for the formats offered with a domain.

    IOC is dropped for any domain other than threat intelligence even if the
    API payload lists it.
    """
    formats_by_domain = options_payload.get("formats_by_domain") or {}
    rows = formats_by_domain.get(domain, []) if isinstance(formats_by_domain, dict) else []
    labels = choices_to_labels(rows if isinstance(rows, list) else [])
    if domain != THREAT_INTELLIGENCE_DOMAIN:
        labels.pop(IOC_FORMAT, None)
    return labels


def coerce_format(current_format: str | None, offered_formats: list[str]) -> str:
    """Keep the current format when still offered, else fall back to executive."""
    if current_format in offered_formats:
        return str(current_format)
    if FALLBACK_FORMAT in offered_formats or not offered_formats:
        return FALLBACK_FORMAT
    return offered_formats[0]


def report_preview_sections(domain: str) -> list[str]:
    """List the sections a generated report will include."""
    sections = list(BASE_PREVIEW_SECTIONS)
    if domain == THREAT_INTELLIGENCE_DOMAIN:
        sections.append("MITRE ATT&CK mapping")
    elif domain == BCM_DOMAIN:
        sections.append("Business impact analysis")
    return sections


def parse_download_filename(content_disposition: str | None, fallback: str = "report.md") -> str:
    """Extract the file name from a Content-Disposition header."""
    match = _FILENAME_PATTERN.search(content_disposition or "")
    if not match:
        return fallback
    return match.group(1).strip() or fallback


def build_download_caption(filename: str, generated_on: date, max_length: int = 48) -> str:
    return f"{truncate_followed_by_dots(filename, max_length)} | {format_date(generated_on)}"
