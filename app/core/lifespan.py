"""Application lifespan: startup and shutdown.

Only infrastructure wiring lives here: logging setup on startup, SQL engine
dispose on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.shared.telemetry.logging import setup_logging
from app.infrastructure.persistence.database import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the database engine."""
    settings = get_settings()
    setup_logging()
    logger.info(
        "Starting %s %s (storage backend: %s)",
        settings.app_name,
        settings.app_version,
        settings.storage_backend,
    )

    yield

    await dispose_engine()
    logger.info("Shutdown complete")
