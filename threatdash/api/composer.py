"""API endpoints for the shared, stateful report composer."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from threatdash.models.report import GenerationOutcome, ReportDomain, ReportFormat, ReportOptions, TimeWindow
from threatdash.reporting.composer import InvalidReportOptionError, ReportComposer

router = APIRouter(prefix="/api/v1/composer", tags=["composer"])


class ComposerStateResponse(BaseModel):
    """Current options, busy flag and offerable formats."""

    options: ReportOptions
    busy: bool
    available_formats: list[ReportFormat]


class ComposerUpdateRequest(BaseModel):
    """Partial option update; the domain is applied before the format."""

    domain: ReportDomain | None = None
    format: ReportFormat | None = None
    window: TimeWindow | None = None


class GenerationResponse(BaseModel):
    outcome: GenerationOutcome


def get_composer(request: Request) -> ReportComposer:
    """Get the shared report composer from app state."""
    composer = getattr(request.app.state, "composer", None)
    if composer is None:
        raise HTTPException(status_code=503, detail="Report composer is not configured")
    return composer


def _state(composer: ReportComposer) -> ComposerStateResponse:
    return ComposerStateResponse(
        options=composer.options,
        busy=composer.busy,
        available_formats=composer.available_formats(),
    )


@router.get("", response_model=ComposerStateResponse)
async def get_composer_state(
    composer: Annotated[ReportComposer, Depends(get_composer)],
) -> ComposerStateResponse:
    """Return the composer's options and busy flag."""
    return _state(composer)


@router.patch("", response_model=ComposerStateResponse)
async def update_composer_options(
    payload: ComposerUpdateRequest,
    composer: Annotated[ReportComposer, Depends(get_composer)],
) -> ComposerStateResponse:
    """Update any of domain, format and window."""
    if payload.domain is not None:
        composer.set_domain(payload.domain)
    if payload.format is not None:
        try:
            composer.set_format(payload.format)
        except InvalidReportOptionError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
    if payload.window is not None:
        composer.set_window(payload.window)
    return _state(composer)


@router.post("/generate", response_model=GenerationResponse)
async def generate_report(
    composer: Annotated[ReportComposer, Depends(get_composer)],
) -> GenerationResponse:
    """Generate a report with the current options and save it to the output directory."""
    outcome = await composer.generate()
    if outcome == GenerationOutcome.SKIPPED_BUSY:
        raise HTTPException(status_code=409, detail="Report generation already in progress")
    if outcome == GenerationOutcome.FAILED:
        raise HTTPException(status_code=500, detail="Report generation failed")
    return GenerationResponse(outcome=outcome)
