"""Application lifespan: startup and shutdown.

Only infrastructure wiring here: the notification sender on startup and the
SQL engine dispose on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from roster.infrastructure.services import LogOnlyNotificationService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the SQL engine if it was created."""
    # ---- Startup ----
    if getattr(app.state, "notification_service", None) is None:
        app.state.notification_service = LogOnlyNotificationService()

    yield

    # ---- Shutdown ----
    from roster.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
