"""threatdash: FastAPI application entry point."""

import logging
import logging.config
from contextlib import asynccontextmanager
from pathlib import Path

import yaml
from fastapi import FastAPI

from threatdash.api import composer, health, reports, routes
from threatdash.config import get_settings, load_route_table
from threatdash.logging_setup import configure_structured_logging
from threatdash.reporting import DirectoryFileSaver, ReportComposer, SampleStatisticsProvider

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


def setup_logging(log_config_path: Path = Path("config/logging.yaml")) -> None:
    """Load logging configuration from YAML."""
    if log_config_path.exists():
        with open(log_config_path) as f:
            config = yaml.safe_load(f)
        # Ensure log directory exists
        Path("data").mkdir(exist_ok=True)
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
    configure_structured_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.logging_config_path)
    logger.info("threatdash starting up...")

    route_table = load_route_table(settings.routes_config_path)
    logger.info(
        "Configuration loaded successfully (auth_routes=%s, public_routes=%s, database=%s).",
        len(route_table.auth_routes),
        len(route_table.public_routes),
        settings.database_url,
    )

    statistics_provider = SampleStatisticsProvider()
    report_composer = ReportComposer(
        file_saver=DirectoryFileSaver(settings.report_output_dir),
        statistics=statistics_provider,
        options=settings.default_report_options,
        delay_seconds=settings.report_delay_seconds,
    )

    app.state.settings = settings
    app.state.route_table = route_table
    app.state.statistics_provider = statistics_provider
    app.state.report_delay_seconds = settings.report_delay_seconds
    app.state.default_report_options = settings.default_report_options
    app.state.composer = report_composer

    logger.info("threatdash ready.")
    yield
    logger.info("threatdash shutting down...")


app = FastAPI(
    title="threatdash",
    description="Threat-intelligence and BCM reporting dashboard API",
    version=APP_VERSION,
    lifespan=lifespan,
)
app.include_router(health.router)
app.include_router(reports.router)
app.include_router(composer.router)
app.include_router(routes.router)


@app.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "version": APP_VERSION}
