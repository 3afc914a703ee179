"""Health endpoint."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(prefix="/api/v1/health", tags=["health"])


def _path_status(path: Path | None) -> str:
    if path is None:
        return "not_configured"
    try:
        return "present" if path.exists() else "missing"
    except OSError:
        return "unknown"


@router.get("")
async def health_check(request: Request) -> dict[str, Any]:
    """Report composer state and local file dependencies."""
    settings = getattr(request.app.state, "settings", None)
    composer = getattr(request.app.state, "composer", None)
    route_table = getattr(request.app.state, "route_table", None)

    database_status = _path_status(settings.database_path if settings is not None else None)
    output_dir_status = _path_status(settings.report_output_dir if settings is not None else None)

    if composer is None:
        composer_status = "not_initialized"
    else:
        composer_status = "busy" if composer.busy else "idle"

    overall = "healthy" if composer is not None and route_table is not None else "unhealthy"
    return {
        "status": overall,
        "composer": composer_status,
        "route_table": "loaded" if route_table is not None else "not_loaded",
        "database": database_status,
        "report_output_dir": output_dir_status,
    }
