"""API endpoints for report options and one-shot report downloads."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel

from threatdash.models.report import (
    DOMAIN_LABELS,
    FORMAT_LABELS,
    WINDOW_LABELS,
    GenerationOutcome,
    ReportDomain,
    ReportOptions,
    TimeWindow,
    formats_for_domain,
)
from threatdash.reporting.composer import DEFAULT_GENERATION_DELAY_SECONDS, ReportComposer
from threatdash.reporting.deliverer import DownloadCapture
from threatdash.reporting.statistics import SampleStatisticsProvider, StatisticsProvider

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


class OptionChoice(BaseModel):
    """A selectable value and its display label."""

    value: str
    label: str


class ReportOptionsResponse(BaseModel):
    """Choices a selection surface may offer."""

    domains: list[OptionChoice]
    formats_by_domain: dict[str, list[OptionChoice]]
    windows: list[OptionChoice]
    defaults: ReportOptions


def get_statistics_provider(request: Request) -> StatisticsProvider:
    """Get statistics provider from app state, defaulting to sample figures."""
    provider = getattr(request.app.state, "statistics_provider", None)
    return provider or SampleStatisticsProvider()


def get_generation_delay(request: Request) -> float:
    delay = getattr(request.app.state, "report_delay_seconds", None)
    return DEFAULT_GENERATION_DELAY_SECONDS if delay is None else float(delay)


def get_default_options(request: Request) -> ReportOptions:
    defaults = getattr(request.app.state, "default_report_options", None)
    return defaults or ReportOptions()


@router.get("/options", response_model=ReportOptionsResponse)
async def list_report_options(
    defaults: Annotated[ReportOptions, Depends(get_default_options)],
) -> ReportOptionsResponse:
    """Return report domains, per-domain formats and time windows."""
    return ReportOptionsResponse(
        domains=[OptionChoice(value=item.value, label=DOMAIN_LABELS[item]) for item in ReportDomain],
        formats_by_domain={
            domain.value: [
                OptionChoice(value=item.value, label=FORMAT_LABELS[item]) for item in formats_for_domain(domain)
            ]
            for domain in ReportDomain
        },
        windows=[OptionChoice(value=item.value, label=WINDOW_LABELS[item]) for item in TimeWindow],
        defaults=defaults,
    )


@router.post("/download")
async def download_report(
    options: ReportOptions,
    statistics: Annotated[StatisticsProvider, Depends(get_statistics_provider)],
    delay_seconds: Annotated[float, Depends(get_generation_delay)],
) -> Response:
    """Render a report for the given options and return it as a Markdown attachment."""
    capture = DownloadCapture()
    composer = ReportComposer(
        file_saver=capture,
        statistics=statistics,
        options=options,
        delay_seconds=delay_seconds,
    )
    outcome = await composer.generate()
    if outcome != GenerationOutcome.DELIVERED or not capture.captured:
        raise HTTPException(status_code=500, detail="Report generation failed")

    return Response(
        content=capture.payload,
        media_type=capture.media_type,
        headers={"Content-Disposition": capture.content_disposition()},
    )
