"""Unit tests for dashboard report form helpers."""

from __future__ import annotations

from datetime import date

from threatdash.dashboard.report_form_utils import (
    build_download_caption,
    choices_to_labels,
    coerce_format,
    format_choices_for_domain,
    parse_download_filename,
    report_preview_sections,
)

OPTIONS_PAYLOAD = {
    "formats_by_domain": {
        "threat-intelligence": [
            {"value": "executive", "label": "Executive Summary"},
            {"value": "technical", "label": "Technical Report"},
            {"value": "ioc", "label": "IOC Report"},
        ],
        "bcm": [
            {"value": "executive", "label": "Executive Summary"},
            {"value": "technical", "label": "Technical Report"},
            {"value": "ioc", "label": "IOC Report"},
        ],
    }
}


def test_choices_to_labels_skips_malformed_rows() -> None:
    labels = choices_to_labels(
        [{"value": "24h", "label": "Last 24 Hours"}, "skip", {"label": "no value"}, {"value": "7d"}]
    )

    assert labels == {"24h": "Last 24 Hours", "7d": "7d"}


def test_format_choices_never_offer_ioc_for_bcm() -> None:
    assert list(format_choices_for_domain(OPTIONS_PAYLOAD, "threat-intelligence")) == ["executive", "technical", "ioc"]
    assert list(format_choices_for_domain(OPTIONS_PAYLOAD, "bcm")) == ["executive", "technical"]
    assert format_choices_for_domain({}, "bcm") == {}


def test_coerce_format_falls_back_to_executive() -> None:
    assert coerce_format("ioc", ["executive", "technical"]) == "executive"
    assert coerce_format("technical", ["executive", "technical"]) == "technical"
    assert coerce_format(None, ["technical"]) == "technical"


def test_report_preview_sections_by_domain() -> None:
    assert report_preview_sections("threat-intelligence")[-1] == "MITRE ATT&CK mapping"
    assert report_preview_sections("bcm")[-1] == "Business impact analysis"
    assert report_preview_sections("bcm")[0] == "Executive summary"


def test_parse_download_filename() -> None:
    header = 'attachment; filename="bcm-executive-report-2026-03-14.md"'

    assert parse_download_filename(header) == "bcm-executive-report-2026-03-14.md"
    assert parse_download_filename("attachment; filename=report-x.md") == "report-x.md"
    assert parse_download_filename(None) == "report.md"


def test_build_download_caption_truncates_long_names() -> None:
    caption = build_download_caption(
        "threat-intelligence-executive-report-2026-03-14.md", date(2026, 3, 14), max_length=20
    )

    assert caption == "threat-intelligence-... | March 14, 2026"
