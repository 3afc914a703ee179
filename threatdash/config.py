"""Application configuration loading and validation."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from threatdash.models.report import ReportDomain, ReportFormat, ReportOptions, TimeWindow, is_format_allowed
from threatdash.models.routes import RouteTable


class Settings(BaseSettings):
    """Strongly typed settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TDASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Report composer
    report_delay_seconds: float = 2.0
    report_output_dir: Path = Path("data/reports")
    default_report_domain: ReportDomain = ReportDomain.THREAT_INTELLIGENCE
    default_report_format: ReportFormat = ReportFormat.EXECUTIVE
    default_time_window: TimeWindow = TimeWindow.LAST_24H

    # File-based relational store (schema + migrations managed outside this service)
    database_url: str = "sqlite:///./threat-intel.db"
    database_schema_path: Path = Path("src/db/schema")
    database_migrations_dir: Path = Path("drizzle")

    # Dashboard
    api_base_url: str = "http://localhost:8000"
    dashboard_cache_ttl_seconds: int = 30

    # File-based configs
    routes_config_path: Path = Path("config/routes.yaml")
    logging_config_path: Path = Path("config/logging.yaml")

    @property
    def default_report_options(self) -> ReportOptions:
        return ReportOptions(
            domain=self.default_report_domain,
            format=self.default_report_format,
            window=self.default_time_window,
        )

    @property
    def database_path(self) -> Path | None:
        """Return the store file path for ``sqlite:///`` URLs."""
        prefix = "sqlite:///"
        if not self.database_url.startswith(prefix):
            return None
        return Path(self.database_url[len(prefix) :])

    @model_validator(mode="after")
    def validate_runtime_configuration(self) -> "Settings":
        """Validate cross-field configuration constraints."""
        if self.report_delay_seconds < 0:
            raise ValueError("TDASH_REPORT_DELAY_SECONDS must be >= 0")

        if self.dashboard_cache_ttl_seconds <= 0:
            raise ValueError("TDASH_DASHBOARD_CACHE_TTL_SECONDS must be > 0")

        if not is_format_allowed(self.default_report_domain, self.default_report_format):
            raise ValueError(
                "TDASH_DEFAULT_REPORT_FORMAT=ioc requires TDASH_DEFAULT_REPORT_DOMAIN=threat-intelligence"
            )

        if not self.database_url.startswith("sqlite:///"):
            raise ValueError("TDASH_DATABASE_URL must be a sqlite:/// file URL")

        return self


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        parsed = yaml.safe_load(handle)

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        raise ValueError(f"YAML config must be a mapping: {path}")

    return parsed


def load_route_table(path: str | Path = "config/routes.yaml") -> RouteTable:
    """Load and validate the route classification YAML config."""
    config_path = Path(path)
    payload = _load_yaml(config_path)

    try:
        return RouteTable.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid route config at {config_path}: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
