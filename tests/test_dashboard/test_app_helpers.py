"""Unit tests for dashboard app helper functions."""

from __future__ import annotations

from typing import Any

import pytest

import threatdash.dashboard.app as dashboard_app


class _FakeResponse:
    def __init__(self, payload: Any = None, *, content: bytes = b"", headers: dict[str, str] | None = None):
        self._payload = payload
        self.content = content
        self.headers = headers or {}

    def raise_for_status(self) -> None:
        return None

    def json(self) -> Any:
        return self._payload


def _fake_client(called: dict[str, Any], response: _FakeResponse):
    class _FakeClient:
        def __init__(self, *, timeout: float):
            called["timeout"] = timeout

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb) -> bool:
            return False

        def get(self, url: str) -> _FakeResponse:
            called["url"] = url
            return response

        def post(self, url: str, json: dict[str, Any]) -> _FakeResponse:
            called["url"] = url
            called["json"] = json
            return response

    return _FakeClient


def test_api_get_uses_timeout_and_returns_dict_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    called: dict[str, Any] = {}
    monkeypatch.setattr(dashboard_app.httpx, "Client", _fake_client(called, _FakeResponse({"domains": []})))

    payload = dashboard_app._api_get("http://app:8000/", "/api/v1/reports/options")

    assert payload == {"domains": []}
    assert called["timeout"] == dashboard_app.HTTP_TIMEOUT_SECONDS
    assert called["url"] == "http://app:8000/api/v1/reports/options"


def test_api_get_rejects_non_mapping_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dashboard_app.httpx, "Client", _fake_client({}, _FakeResponse([1, 2, 3])))

    with pytest.raises(ValueError, match="Unexpected API payload type"):
        dashboard_app._api_get("http://app:8000", "/api/v1/reports/options")


def test_download_report_posts_options_and_reads_filename(monkeypatch: pytest.MonkeyPatch) -> None:
    called: dict[str, Any] = {}
    response = _FakeResponse(
        content=b"# Business Continuity Management Report",
        headers={"content-disposition": 'attachment; filename="bcm-technical-report-2026-03-14.md"'},
    )
    monkeypatch.setattr(dashboard_app.httpx, "Client", _fake_client(called, response))

    filename, content = dashboard_app._download_report(
        "http://app:8000",
        {"domain": "bcm", "format": "technical", "window": "7d"},
    )

    assert filename == "bcm-technical-report-2026-03-14.md"
    assert content == b"# Business Continuity Management Report"
    assert called["url"] == "http://app:8000/api/v1/reports/download"
    assert called["json"] == {"domain": "bcm", "format": "technical", "window": "7d"}
