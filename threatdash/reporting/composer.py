"""Report composer: option state, generation, and delivery."""

from __future__ import annotations

import asyncio
import io
import time
from collections.abc import Callable
from datetime import datetime

import structlog

from threatdash.models.report import (
    GenerationOutcome,
    GenerationState,
    ReportDocument,
    ReportDomain,
    ReportFormat,
    ReportOptions,
    TimeWindow,
    formats_for_domain,
    is_format_allowed,
    utc_now,
)
from threatdash.reporting.deliverer import FileSaver
from threatdash.reporting.statistics import SampleStatisticsProvider, StatisticsProvider
from threatdash.reporting.templates import (
    build_report_filename,
    render_bcm_report,
    render_threat_intelligence_report,
)

logger = structlog.get_logger(__name__)

DEFAULT_GENERATION_DELAY_SECONDS = 2.0


class GenerationError(RuntimeError):
    """Rendering or delivering a report failed."""


class InvalidReportOptionError(ValueError):
    """A report option combination that the composer refuses to hold."""


class ReportComposer:
    """Hold report options and turn them into a delivered Markdown document."""

    def __init__(
        self,
        *,
        file_saver: FileSaver,
        statistics: StatisticsProvider | None = None,
        options: ReportOptions | None = None,
        delay_seconds: float = DEFAULT_GENERATION_DELAY_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.file_saver = file_saver
        self.statistics = statistics or SampleStatisticsProvider()
        self.delay_seconds = delay_seconds
        self.clock = clock
        initial = options or ReportOptions()
        self._domain = initial.domain
        self._format = initial.format
        self._window = initial.window
        self._busy = False

    @property
    def domain(self) -> ReportDomain:
        return self._domain

    @property
    def format(self) -> ReportFormat:
        return self._format

    @property
    def window(self) -> TimeWindow:
        return self._window

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def options(self) -> ReportOptions:
        return ReportOptions(domain=self._domain, format=self._format, window=self._window)

    @property
    def state(self) -> GenerationState:
        return GenerationState(busy=self._busy)

    def available_formats(self) -> list[ReportFormat]:
        """Formats the selection surface may offer for the current domain."""
        return formats_for_domain(self._domain)

    def set_domain(self, domain: ReportDomain | str) -> None:
        """Change the domain, falling back to the executive format when IOC no longer applies."""
        new_domain = ReportDomain(domain)
        if not is_format_allowed(new_domain, self._format):
            logger.info(
                "report_format_coerced",
                domain=new_domain.value,
                previous_format=self._format.value,
                format=ReportFormat.EXECUTIVE.value,
            )
            self._format = ReportFormat.EXECUTIVE
        self._domain = new_domain

    def set_format(self, report_format: ReportFormat | str) -> None:
        new_format = ReportFormat(report_format)
        if not is_format_allowed(self._domain, new_format):
            raise InvalidReportOptionError(
                f"Report format '{new_format.value}' is not available for '{self._domain.value}' reports"
            )
        self._format = new_format

    def set_window(self, window: TimeWindow | str) -> None:
        self._window = TimeWindow(window)

    def render(self, options: ReportOptions | None = None) -> ReportDocument:
        """Render ``options`` (the current options by default) without delivering it."""
        options = options or self.options
        generated_at = self.clock()
        if options.domain is ReportDomain.THREAT_INTELLIGENCE:
            content = render_threat_intelligence_report(
                options.format,
                options.window,
                generated_at,
                self.statistics.threat_intelligence(options.window),
            )
        else:
            content = render_bcm_report(
                options.format,
                options.window,
                generated_at,
                self.statistics.bcm(options.window),
            )
        return ReportDocument(
            content=content,
            filename=build_report_filename(options.domain, options.format, generated_at),
            generated_at=generated_at,
        )

    async def generate(self) -> GenerationOutcome:
        """Render and deliver a report for the options in effect at call time.

        Option changes made during the delay apply to the next generation.
        Calls made while a generation is in flight return ``SKIPPED_BUSY``.
        Failures are logged and reported as ``FAILED``; nothing is retried.
        """
        options = self.options
        log = logger.bind(
            component="report_composer",
            domain=options.domain.value,
            format=options.format.value,
            window=options.window.value,
        )
        if self._busy:
            log.info("report_generation_skipped_busy")
            return GenerationOutcome.SKIPPED_BUSY

        self._busy = True
        started = time.time()
        log.info("report_generation_started")
        try:
            await asyncio.sleep(self.delay_seconds)
            await self._render_and_deliver(options)
        except GenerationError as exc:
            log.error("report_generation_failed", error=str(exc.__cause__ or exc))
            return GenerationOutcome.FAILED
        finally:
            self._busy = False

        log.info("report_generation_completed", latency_seconds=round(time.time() - started, 4))
        return GenerationOutcome.DELIVERED

    async def _render_and_deliver(self, options: ReportOptions) -> None:
        try:
            document = self.render(options)
        except Exception as exc:  # noqa: BLE001
            raise GenerationError("Report rendering failed") from exc

        try:
            with io.BytesIO(document.to_bytes()) as buffer:
                await self.file_saver.save(
                    buffer,
                    media_type=document.media_type,
                    filename=document.filename,
                )
        except Exception as exc:  # noqa: BLE001
            raise GenerationError(f"Report delivery failed: {document.filename}") from exc
