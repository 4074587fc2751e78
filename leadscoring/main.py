"""
FastAPI application entry point for the Leads Dashboard API.

This module configures logging and CORS, registers the API routers and manages
the database pool lifecycle. The pool backs the scoring configuration store
(app_settings) and the Google Sheets integration lookup.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leadscoring import __version__
from leadscoring.api import api_router
from leadscoring.core.config import get_settings
from leadscoring.core.database import init_db, close_db


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Initialize the database connection pool used for integration CSV
          lookups and the stored scoring configuration

    On shutdown:
        - Close database connection pool
    """
    # Startup
    logger.info("Leads Dashboard API starting")
    try:
        await init_db()
        logger.info("Database connection pool initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        # Leads can still be served with the default scoring config

    yield

    # Shutdown
    logger.info("Leads Dashboard API shutting down")
    try:
        await close_db()
        logger.info("Database connection pool closed")
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


# Create FastAPI application
app = FastAPI(
    title="Leads Dashboard API",
    version=__version__,
    description=(
        "FastAPI backend for the marketing leads dashboard. "
        "Ingests survey leads from Google Sheets, scores them and "
        "aggregates KPIs, distributions and tier breakdowns."
    ),
    lifespan=lifespan,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(api_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy'
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    """
    Root endpoint providing API information.

    Returns:
        Dict with API name and version
    """
    return {
        "name": "Leads Dashboard API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "leadscoring.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
