"""API tests for the stateful composer endpoints."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.testclient import TestClient

from threatdash.api.composer import router
from threatdash.reporting.composer import ReportComposer
from threatdash.reporting.deliverer import DirectoryFileSaver


def build_test_client(composer: ReportComposer | None) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.state.composer = composer
    return TestClient(app)


def _make_composer(output_dir: Path) -> ReportComposer:
    return ReportComposer(file_saver=DirectoryFileSaver(output_dir), delay_seconds=0)


def test_get_composer_state_defaults(tmp_path: Path) -> None:
    client = build_test_client(_make_composer(tmp_path))

    response = client.get("/api/v1/composer")

    assert response.status_code == 200
    payload = response.json()
    assert payload["options"] == {"domain": "threat-intelligence", "format": "executive", "window": "24h"}
    assert payload["busy"] is False
    assert payload["available_formats"] == ["executive", "technical", "ioc"]


def test_patch_domain_coerces_ioc_format(tmp_path: Path) -> None:
    client = build_test_client(_make_composer(tmp_path))
    client.patch("/api/v1/composer", json={"format": "ioc"})

    response = client.patch("/api/v1/composer", json={"domain": "bcm", "window": "90d"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["options"] == {"domain": "bcm", "format": "executive", "window": "90d"}
    assert payload["available_formats"] == ["executive", "technical"]


def test_patch_rejects_ioc_for_bcm(tmp_path: Path) -> None:
    client = build_test_client(_make_composer(tmp_path))
    client.patch("/api/v1/composer", json={"domain": "bcm"})

    response = client.patch("/api/v1/composer", json={"format": "ioc"})

    assert response.status_code == 422
    assert client.get("/api/v1/composer").json()["options"]["format"] == "executive"


def test_generate_saves_report_to_output_dir(tmp_path: Path) -> None:
    client = build_test_client(_make_composer(tmp_path))
    client.patch("/api/v1/composer", json={"domain": "bcm", "format": "technical", "window": "7d"})

    response = client.post("/api/v1/composer/generate")

    assert response.status_code == 200
    assert response.json() == {"outcome": "delivered"}
    saved = list(tmp_path.glob("bcm-technical-report-*.md"))
    assert len(saved) == 1
    assert "7.2/10 (High)" in saved[0].read_text(encoding="utf-8")


def test_generate_returns_409_while_busy(tmp_path: Path) -> None:
    composer = _make_composer(tmp_path)
    composer._busy = True
    client = build_test_client(composer)

    response = client.post("/api/v1/composer/generate")

    assert response.status_code == 409
    assert list(tmp_path.iterdir()) == []


def test_generate_returns_500_when_save_fails(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("occupied", encoding="utf-8")
    client = build_test_client(_make_composer(blocker))

    response = client.post("/api/v1/composer/generate")

    assert response.status_code == 500
    assert client.get("/api/v1/composer").json()["busy"] is False


def test_composer_endpoints_return_503_when_not_configured() -> None:
    client = build_test_client(None)

    response = client.get("/api/v1/composer")

    assert response.status_code == 503
