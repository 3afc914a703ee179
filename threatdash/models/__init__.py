"""Shared data models for threatdash."""

from threatdash.models.report import (
    DOMAIN_LABELS,
    FORMAT_LABELS,
    REPORT_MEDIA_TYPE,
    WINDOW_LABELS,
    GenerationOutcome,
    GenerationState,
    ReportDocument,
    ReportDomain,
    ReportFormat,
    ReportOptions,
    TimeWindow,
    formats_for_domain,
    is_format_allowed,
)
from threatdash.models.routes import RouteClass, RouteTable, path_matches

__all__ = [
    "DOMAIN_LABELS",
    "FORMAT_LABELS",
    "GenerationOutcome",
    "GenerationState",
    "REPORT_MEDIA_TYPE",
    "ReportDocument",
    "ReportDomain",
    "ReportFormat",
    "ReportOptions",
    "RouteClass",
    "RouteTable",
    "TimeWindow",
    "WINDOW_LABELS",
    "formats_for_domain",
    "is_format_allowed",
    "path_matches",
]
