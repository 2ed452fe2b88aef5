"""
Application lifecycle management using the FastAPI lifespan pattern.

This module follows SRP by handling only application startup/shutdown logic.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config.settings import get_settings
from app.core.container import get_container
from app.database.async_db import check_db_connection, dispose_engine

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Handles startup initialization and graceful shutdown.
    """

    def __init__(self) -> None:
        self._initialized = False

    async def startup(self) -> None:
        """
        Execute startup tasks.

        Called when the application starts.
        """
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")
        settings = get_settings()

        # Build shared singletons (operating template is validated here)
        container = get_container()
        template = container.base.get_availability_index().template
        logger.info(f"Clinic doctors: {', '.join(template.doctors)}")

        if settings.STORAGE_BACKEND == "postgres":
            if await check_db_connection():
                logger.info("Database connection verified")
            else:
                logger.warning("Database is not reachable; booking requests will fail until it is")
        else:
            logger.warning("Using in-memory storage; appointments are lost on restart")

        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        """
        Execute shutdown tasks.

        Called when the application stops.
        """
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")
        await dispose_engine()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")


_lifecycle_manager = LifecycleManager()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for the FastAPI application.

    Args:
        app: FastAPI application instance

    Yields:
        None during application runtime
    """
    await _lifecycle_manager.startup()
    try:
        yield
    finally:
        await _lifecycle_manager.shutdown()
