"""Tests for structured logging of report generation."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from threatdash.logging_setup import configure_structured_logging
from threatdash.models.report import GenerationOutcome


def _json_events(caplog: pytest.LogCaptureFixture) -> list[dict]:
    events = []
    for record in caplog.records:
        try:
            events.append(json.loads(record.getMessage()))
        except Exception:  # noqa: BLE001
            continue
    return events


def test_structlog_json_includes_contextvars(caplog: pytest.LogCaptureFixture) -> None:
    configure_structured_logging()
    caplog.set_level(logging.INFO)

    structlog.contextvars.bind_contextvars(request_id="req-1")
    structlog.get_logger("test").info("report_requested", domain="bcm")
    structlog.contextvars.clear_contextvars()

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "report_requested"
    assert payload["request_id"] == "req-1"
    assert payload["domain"] == "bcm"
    assert payload["level"] == "info"


@pytest.mark.asyncio
async def test_composer_logs_generation_lifecycle(
    create_test_composer, caplog: pytest.LogCaptureFixture
) -> None:
    configure_structured_logging()
    caplog.set_level(logging.INFO)
    composer = create_test_composer()
    composer.set_window("30d")

    outcome = await composer.generate()

    assert outcome == GenerationOutcome.DELIVERED
    events = _json_events(caplog)
    names = [item.get("event") for item in events]
    assert "report_generation_started" in names
    completed = next(item for item in events if item.get("event") == "report_generation_completed")
    assert completed["component"] == "report_composer"
    assert completed["window"] == "30d"
    assert completed["format"] == "executive"


def test_composer_logs_format_coercion(create_test_composer, caplog: pytest.LogCaptureFixture) -> None:
    configure_structured_logging()
    caplog.set_level(logging.INFO)
    composer = create_test_composer()
    composer.set_format("ioc")

    composer.set_domain("bcm")

    coerced = next(item for item in _json_events(caplog) if item.get("event") == "report_format_coerced")
    assert coerced["previous_format"] == "ioc"
    assert coerced["format"] == "executive"
