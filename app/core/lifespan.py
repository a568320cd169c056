"""Startup and shutdown wiring for the audit API.

Builds the process-wide pieces the request handlers share: the Snipe-IT
HTTP client, the asset snapshot cache, the audit tables and, when
enabled, tracing. Shutdown releases them in reverse.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.application.services.asset_snapshot_cache import AssetSnapshotCache
from app.core.config import Settings, get_settings
from app.infrastructure.persistence import database
from app.shared.telemetry.telemetry import Telemetry, get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


def _start_tracing(app: FastAPI, settings: Settings) -> None:
    telemetry = Telemetry.from_settings(settings)
    if telemetry.start() is None:
        return
    telemetry.instrument_app(app)
    telemetry.instrument_engine(database.get_engine())
    set_telemetry(telemetry)


def _stop_tracing() -> None:
    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()

    if settings.telemetry_enabled:
        _start_tracing(app, settings)

    app.state.snipeit_http_client = httpx.AsyncClient(
        timeout=settings.snipeit_timeout_seconds
    )
    app.state.asset_cache = AssetSnapshotCache(
        ttl_ms=settings.asset_cache_ttl_seconds * 1000
    )
    if settings.database_auto_create:
        await database.create_schema()

    logger.info(
        "%s %s ready; Snipe-IT at %s",
        settings.app_name,
        settings.app_version,
        settings.snipeit_url,
    )
    try:
        yield
    finally:
        client = getattr(app.state, "snipeit_http_client", None)
        if client is not None:
            await client.aclose()
            app.state.snipeit_http_client = None
        _stop_tracing()
        await database.dispose_engine()
        logger.info("Shutdown complete")
