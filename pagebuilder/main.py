"""
Page builder API - FastAPI Application

Main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from pagebuilder.config import get_settings
from pagebuilder.core.cache.redis_client import close_shared_redis
from pagebuilder.core.database import close_db, init_db
from pagebuilder.routers import pages_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Suppress noisy third-party loggers
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Initializes the database engine on startup; disposes it and the Redis
    connection on shutdown.
    """
    settings = get_settings()
    logger.info(f"Starting page builder API ({settings.environment})")
    await init_db(create_tables=settings.is_development or settings.is_testing)

    yield

    await close_shared_redis()
    await close_db()
    logger.info("Page builder API stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title="Page Builder API",
        description="Pages, components, layouts and event handlers of app versions",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.include_router(pages_router)

    return app


app = create_app()
