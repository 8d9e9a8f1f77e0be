"""
Knowledge Hub Persistence Service

FastAPI application serving the notes and bookmarks collections.
Handles startup checks (database, schema) and graceful shutdown.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import text

from knowledge_hub.api.v1.bookmarks import router as bookmarks_router
from knowledge_hub.api.v1.notes import router as notes_router
from knowledge_hub.core.config import settings
from knowledge_hub.core.database import create_tables, dispose_engine, get_engine
from knowledge_hub.core.logging import setup_logging

# Initialize logging before any log statements
setup_logging()
logger = logging.getLogger(__name__)


async def wait_for_db(retries: int = 10, delay: int = 1) -> bool:
    """
    Wait for PostgreSQL to become available.

    Useful in containerized environments where the database may start
    after the application. Implements retry logic with linear delay.

    Args:
        retries: Maximum connection attempts.
        delay: Seconds between attempts.

    Returns:
        True if connection established, False if all retries exhausted.
    """
    engine = get_engine()
    for i in range(retries):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                logger.info("Postgres connection established")
                return True
        except Exception as e:
            logger.warning("Waiting for Postgres (%d/%d)... Error: %s", i + 1, retries, e)
            await asyncio.sleep(delay)

    return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
        - Validates database connectivity (required, blocks startup on failure)
        - Creates the notes and bookmarks tables when missing

    Shutdown:
        - Disposes the database engine
    """
    logger.info("Starting %s...", settings.PROJECT_NAME)
    logger.info("Log Level: %s", settings.LOG_LEVEL)

    if not await wait_for_db():
        logger.critical("Could not connect to Postgres. Shutting down.")
        raise RuntimeError("Database connection failed")

    await create_tables()

    yield  # Application runs here

    logger.info("Shutting down %s...", settings.PROJECT_NAME)
    await dispose_engine()


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.include_router(notes_router, prefix="/api/v1/notes", tags=["Notes"])
app.include_router(bookmarks_router, prefix="/api/v1/bookmarks", tags=["Bookmarks"])


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers and orchestrators."""
    return {
        "status": "ok",
        "service": "knowledge-hub",
        "environment": os.getenv("ENVIRONMENT", "unknown"),
        "db": "connected",
    }
