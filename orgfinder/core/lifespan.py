"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, text index, telemetry,
DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from orgfinder.core.config import get_settings
from orgfinder.domain.exceptions import IndexUnavailableException
from orgfinder.infrastructure.persistence.database import (
    dispose_engine,
    get_engine,
    get_session_factory,
)
from orgfinder.infrastructure.persistence.repositories import RecordRepository
from orgfinder.infrastructure.search import TextIndex
from orgfinder.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


def build_text_index() -> TextIndex:
    """TextIndex fed from the configured record store."""
    settings = get_settings()
    return TextIndex(
        RecordRepository(get_session_factory()),
        fuzzy=settings.text_index_fuzzy,
        prefix=settings.text_index_prefix,
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, telemetry (if enabled), text index (warmed if
    configured). Shutdown order: telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()

    if settings.telemetry_enabled:
        from orgfinder.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_sqlalchemy(get_engine())
        logger.info("Telemetry initialized")

    if getattr(app.state, "text_index", None) is None:
        app.state.text_index = build_text_index()

    if settings.text_index_warm_on_startup:
        try:
            await app.state.text_index.ensure_ready()
        except IndexUnavailableException as e:
            # Text search retries the build on first use.
            logger.warning("Text index warm-up failed: %s", e.details)

    yield

    # ---- Shutdown ----
    from orgfinder.shared.telemetry.telemetry import get_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        logger.info("Telemetry shutdown complete")

    await dispose_engine()
