"""Report composer models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

REPORT_MEDIA_TYPE = "text/markdown"


def utc_now() -> datetime:
    """Return timezone-aware current UTC timestamp."""
    return datetime.now(timezone.utc)


class ReportDomain(str, Enum):
    THREAT_INTELLIGENCE = "threat-intelligence"
    BCM = "bcm"


class ReportFormat(str, Enum):
    EXECUTIVE = "executive"
    TECHNICAL = "technical"
    IOC = "ioc"


class TimeWindow(str, Enum):
    LAST_24H = "24h"
    LAST_7D = "7d"
    LAST_30D = "30d"
    LAST_90D = "90d"


class GenerationOutcome(str, Enum):
    DELIVERED = "delivered"
    FAILED = "failed"
    SKIPPED_BUSY = "skipped_busy"


DOMAIN_LABELS: dict[ReportDomain, str] = {
    ReportDomain.THREAT_INTELLIGENCE: "Threat Intelligence",
    ReportDomain.BCM: "BCM Impact Analysis",
}

FORMAT_LABELS: dict[ReportFormat, str] = {
    ReportFormat.EXECUTIVE: "Executive Summary",
    ReportFormat.TECHNICAL: "Technical Report",
    ReportFormat.IOC: "IOC Report",
}

WINDOW_LABELS: dict[TimeWindow, str] = {
    TimeWindow.LAST_24H: "Last 24 Hours",
    TimeWindow.LAST_7D: "Last 7 Days",
    TimeWindow.LAST_30D: "Last 30 Days",
    TimeWindow.LAST_90D: "Last 90 Days",
}


def is_format_allowed(domain: ReportDomain | str, report_format: ReportFormat | str) -> bool:
    """Return True when the format may be combined with the domain."""
    if ReportFormat(report_format) is ReportFormat.IOC:
        return ReportDomain(domain) is ReportDomain.THREAT_INTELLIGENCE
    return True


def formats_for_domain(domain: ReportDomain | str) -> list[ReportFormat]:
    """Return the formats a selection surface may offer for a domain."""
    return [item for item in ReportFormat if is_format_allowed(domain, item)]


class ReportOptions(BaseModel):
    """User-selected report domain, format and time window."""

    domain: ReportDomain = ReportDomain.THREAT_INTELLIGENCE
    format: ReportFormat = ReportFormat.EXECUTIVE
    window: TimeWindow = TimeWindow.LAST_24H

    @model_validator(mode="after")
    def validate_format_for_domain(self) -> "ReportOptions":
        if not is_format_allowed(self.domain, self.format):
            raise ValueError(f"Report format '{self.format.value}' is only available for threat-intelligence reports")
        return self


class GenerationState(BaseModel):
    """Busy flag exposed to the selection surface."""

    busy: bool = False


class ReportDocument(BaseModel):
    """Rendered report payload handed to a file saver."""

    model_config = ConfigDict(frozen=True)

    content: str
    filename: str
    media_type: str = REPORT_MEDIA_TYPE
    generated_at: datetime = Field(default_factory=utc_now)

    def to_bytes(self) -> bytes:
        return self.content.encode("utf-8")
