"""Application lifespan: startup and shutdown.

Only wiring of infrastructure here (logging, telemetry, shared HTTP client
for the Discord API, DB engine dispose); no business logic.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from backoffice.core.config import get_settings
from backoffice.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Shutdown order: shared HTTP client close, telemetry flush, SQL engine dispose.
    """
    setup_logging()
    settings = get_settings()

    # ---- Startup ----
    # Shared HTTP client for Discord API calls (connection reuse across role syncs).
    app.state.discord_http_client = httpx.AsyncClient(
        timeout=settings.discord_timeout_seconds
    )
    if not settings.discord_guild_id or settings.discord_bot_token is None:
        logger.warning("Discord guild id or bot token not set; role sync will report failures")

    if settings.telemetry_enabled:
        from backoffice.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "discord_http_client", None) is not None:
        await app.state.discord_http_client.aclose()
        app.state.discord_http_client = None
        logger.info("Discord HTTP client closed")

    from backoffice.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    from backoffice.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
