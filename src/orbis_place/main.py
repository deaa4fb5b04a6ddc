# src/orbis_place/main.py
"""Main entry point for the Orbis Place API."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from orbis_place.api import teams_router, users_router
from orbis_place.core.errors import register_exception_handlers
from orbis_place.core.logging import configure_logging
from orbis_place.core.settings import settings
from orbis_place.db.session import create_tables

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Community marketplace API: users, teams, servers and resources",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_exception_handlers(app)

# Include API routers
app.include_router(users_router, prefix=settings.api_prefix)
app.include_router(teams_router, prefix=settings.api_prefix)

# Locally stored profile images
app.mount(
    settings.media_url_prefix,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="media",
)


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    if settings.create_tables_on_startup:
        create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("orbis_place.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
