"""Host file-save capabilities for rendered reports."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import BinaryIO, Protocol

logger = logging.getLogger(__name__)


class FileSaver(Protocol):
    """Save a byte payload to the user under a file name (fire-and-forget)."""

    async def save(self, buffer: BinaryIO, *, media_type: str, filename: str) -> None: ...


class DirectoryFileSaver:
    """Write reports into a local output directory."""

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)

    async def save(self, buffer: BinaryIO, *, media_type: str, filename: str) -> None:
        payload = buffer.read()
        target = self._resolve_target(filename)
        await asyncio.to_thread(self._write, target, payload)
        logger.info("Report saved: path=%s media_type=%s bytes=%s", target, media_type, len(payload))

    def _resolve_target(self, filename: str) -> Path:
        name = Path(filename).name
        if not name or name != filename:
            raise ValueError(f"Report filename must not contain a directory component: {filename!r}")
        return self.output_dir / name

    def _write(self, target: Path, payload: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)


class DownloadCapture:
    """Hold one saved payload so an HTTP response can stream it to the browser."""

    def __init__(self) -> None:
        self.payload: bytes | None = None
        self.media_type: str | None = None
        self.filename: str | None = None

    async def save(self, buffer: BinaryIO, *, media_type: str, filename: str) -> None:
        self.payload = buffer.read()
        self.media_type = media_type
        self.filename = filename

    @property
    def captured(self) -> bool:
        return self.payload is not None

    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'
