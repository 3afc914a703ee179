"""Streamlit report generator for threat-intelligence and BCM reports."""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any

import httpx
import streamlit as st

from threatdash.dashboard.report_form_utils import (
    build_download_caption,
    choices_to_labels,
    coerce_format,
    format_choices_for_domain,
    parse_download_filename,
    report_preview_sections,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = os.getenv("TDASH_API_BASE_URL", "http://localhost:8000")
OPTIONS_CACHE_TTL_SECONDS = int(os.getenv("TDASH_DASHBOARD_CACHE_TTL_SECONDS", "30"))
# Covers the server-side simulated generation delay.
HTTP_TIMEOUT_SECONDS = 30.0


def _api_get(base_url: str, path: str) -> dict[str, Any]:
    url = f"{base_url.rstrip('/')}{path}"
    with httpx.Client(timeout=HTTP_TIMEOUT_SECONDS) as client:
        response = client.get(url)
        response.raise_for_status()
        payload = response.json()
    if not isinstance(payload, dict):
        raise ValueError(f"Unexpected API payload type for {path}: {type(payload)!r}")
    return payload


def _download_report(base_url: str, options: dict[str, str]) -> tuple[str, bytes]:
    url = f"{base_url.rstrip('/')}/api/v1/reports/download"
    with httpx.Client(timeout=HTTP_TIMEOUT_SECONDS) as client:
        response = client.post(url, json=options)
        response.raise_for_status()
    filename = parse_download_filename(response.headers.get("content-disposition"))
    return filename, response.content


def _select(label: str, labels: dict[str, str], current: str | None) -> str:
    values = list(labels)
    index = values.index(current) if current in values else 0
    return st.selectbox(label, options=values, index=index, format_func=lambda value: labels.get(value, value))


def _request_generation() -> None:
    st.session_state["report_busy"] = True


def main() -> None:
    st.set_page_config(
        page_title="Threat Intelligence Dashboard",
        page_icon=":shield:",
        layout="centered",
    )
    st.title("Report Generator")

    with st.sidebar:
        st.header("Data Source")
        api_base_url = st.text_input("API Base URL", value=DEFAULT_API_BASE_URL, help="FastAPI base URL")
        if st.button("Reload options"):
            st.cache_data.clear()

    @st.cache_data(ttl=OPTIONS_CACHE_TTL_SECONDS, show_spinner=False)
    def cached_options(base_url: str) -> dict[str, Any]:
        return _api_get(base_url, "/api/v1/reports/options")

    try:
        options_payload = cached_options(api_base_url)
    except httpx.HTTPStatusError as exc:
        st.error(f"Failed to fetch report options (HTTP {exc.response.status_code}) from {api_base_url}.")
        return
    except Exception as exc:  # noqa: BLE001
        st.error(f"Failed to fetch report options from {api_base_url}: {exc}")
        return

    defaults = options_payload.get("defaults") or {}
    busy = bool(st.session_state.get("report_busy", False))

    domain = _select(
        "Report Type",
        choices_to_labels(options_payload.get("domains", [])),
        st.session_state.get("report_domain", defaults.get("domain")),
    )
    format_labels = format_choices_for_domain(options_payload, domain)
    report_format = _select(
        "Report Format",
        format_labels,
        coerce_format(st.session_state.get("report_format", defaults.get("format")), list(format_labels)),
    )
    window = _select(
        "Time Range",
        choices_to_labels(options_payload.get("windows", [])),
        st.session_state.get("report_window", defaults.get("window")),
    )
    st.session_state["report_domain"] = domain
    st.session_state["report_format"] = report_format
    st.session_state["report_window"] = window

    st.divider()
    st.button(
        "Generating Report..." if busy else "Generate Report",
        on_click=_request_generation,
        disabled=busy,
        use_container_width=True,
    )

    if busy:
        with st.spinner("Generating Report..."):
            try:
                filename, content = _download_report(
                    api_base_url,
                    {"domain": domain, "format": report_format, "window": window},
                )
                st.session_state["report_download"] = {"filename": filename, "content": content}
            except Exception as exc:  # noqa: BLE001
                # The control just returns to idle; the failure is only logged.
                logger.error("Report generation failed: domain=%s format=%s error=%s", domain, report_format, exc)
                st.session_state.pop("report_download", None)
            finally:
                st.session_state["report_busy"] = False
        st.rerun()

    download = st.session_state.get("report_download")
    if download:
        st.download_button(
            "Download Report",
            data=download["content"],
            file_name=download["filename"],
            mime="text/markdown",
            use_container_width=True,
        )
        st.caption(build_download_caption(download["filename"], date.today()))

    st.caption("Report will include:")
    st.markdown("\n".join(f"- {section}" for section in report_preview_sections(domain)))


if __name__ == "__main__":
    main()
