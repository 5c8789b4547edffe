"""
FastAPI application entry point for the Ads Dashboard API.

This module serves as the central orchestration file for the Python backend service layer.
It configures CORS, registers API routers, and starts the ASGI server.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ads_dashboard import __version__
from ads_dashboard.api import api_router
from ads_dashboard.core.config import get_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    The analytics core keeps no state beyond in-process caches, so startup and
    shutdown only log.
    """
    logger.info(f"{settings.app_name} starting")
    if settings.preferences_path:
        logger.info(f"Preferences stored in {settings.preferences_path}")
    else:
        logger.info("Preferences stored in memory")

    yield

    logger.info(f"{settings.app_name} shutting down")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description=(
        "Backend for the marketplace advertising dashboard. "
        "Provides report upload, per-product metrics with statuses and "
        "recommendations, day-over-day trends and saved preferences."
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
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ads_dashboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
