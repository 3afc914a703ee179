"""Shared test fixtures for threatdash."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import BinaryIO

import pytest

from threatdash.models.report import ReportOptions
from threatdash.reporting.composer import ReportComposer

FIXED_NOW = datetime(2026, 3, 14, 15, 9, 26, tzinfo=timezone.utc)


class RecordingFileSaver:
    """File saver that keeps every saved payload in memory."""

    def __init__(self) -> None:
        self.saved: list[dict[str, object]] = []
        self.buffers: list[BinaryIO] = []

    async def save(self, buffer: BinaryIO, *, media_type: str, filename: str) -> None:
        self.buffers.append(buffer)
        self.saved.append({"payload": buffer.read(), "media_type": media_type, "filename": filename})


class FailingFileSaver:
    """File saver that refuses every save, like a host denying downloads."""

    def __init__(self) -> None:
        self.buffers: list[BinaryIO] = []

    async def save(self, buffer: BinaryIO, *, media_type: str, filename: str) -> None:
        del media_type, filename
        self.buffers.append(buffer)
        raise PermissionError("file save denied by host")


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed UTC timestamp."""
    return lambda: FIXED_NOW


@pytest.fixture
def recording_saver() -> RecordingFileSaver:
    return RecordingFileSaver()


@pytest.fixture
def failing_saver() -> FailingFileSaver:
    return FailingFileSaver()


@pytest.fixture
def create_test_composer(fixed_clock):
    """Factory for composers with no simulated delay and a fixed clock."""

    def _create(*, file_saver=None, options: ReportOptions | None = None, **kwargs) -> ReportComposer:
        return ReportComposer(
            file_saver=file_saver or RecordingFileSaver(),
            options=options,
            delay_seconds=kwargs.pop("delay_seconds", 0),
            clock=kwargs.pop("clock", fixed_clock),
            **kwargs,
        )

    return _create
