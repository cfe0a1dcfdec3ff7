"""FastAPI application for the showcase catalog.

This module provides the FastAPI application with health endpoints,
API routes, error mapping, and lifecycle management.

Run with:
    uvicorn showcase.main:app --reload

Examples:
    >>> # Health check
    >>> curl http://localhost:8000/health

    >>> # API docs
    >>> # Open http://localhost:8000/docs

Tests:
    - tests/unit/test_main.py
    - tests/integration/test_api_websites.py
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from showcase import __version__
from showcase.api.v1 import router as v1_router
from showcase.clients import ShowcaseClients
from showcase.config import Settings, get_settings
from showcase.errors import IngestionFailure, PersistenceFailure, ValidationFailure

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Response models
class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: bool
    blob_backend: str


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str
    detail: str | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Handles startup and shutdown tasks:
    - Build the shared clients and create tables on startup
    - Close connections on shutdown
    """
    logger.info(f"Starting showcase catalog v{__version__}")

    owns_clients = app.state.clients is None
    if owns_clients:
        app.state.clients = ShowcaseClients.from_settings(app.state.settings)
    await app.state.clients.start()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down showcase catalog")
    if owns_clients:
        await app.state.clients.close()
        app.state.clients = None


def _error(status_code: int, error: str, detail: str | None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail).model_dump(),
    )


def create_app(
    settings: Settings | None = None,
    clients: ShowcaseClients | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Validated settings (defaults to the cached environment settings).
        clients: Prebuilt clients; built from settings at startup when omitted.

    Returns:
        Configured FastAPI app.
    """
    if settings is None:
        settings = get_settings()

    # Docs are served in debug mode only, never in production.
    docs_enabled = settings.DEBUG and not settings.is_production

    app = FastAPI(
        title="Showcase Catalog",
        description="Website showcase entries with demo videos",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
    )
    app.state.settings = settings
    app.state.clients = clients

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.DEBUG else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router)

    # Exception handlers
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with consistent response format."""
        return _error(exc.status_code, str(exc.detail), None)

    @app.exception_handler(ValidationFailure)
    async def validation_failure_handler(request: Request, exc: ValidationFailure):
        return _error(422, "Invalid submission", str(exc))

    @app.exception_handler(IngestionFailure)
    async def ingestion_failure_handler(request: Request, exc: IngestionFailure):
        return _error(status.HTTP_502_BAD_GATEWAY, "Failed to upload video", str(exc))

    @app.exception_handler(PersistenceFailure)
    async def persistence_failure_handler(request: Request, exc: PersistenceFailure):
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Catalog unavailable", str(exc))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        detail = str(exc) if settings.DEBUG else None
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", detail)

    # Health endpoints
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Check application health.

        Returns status of:
        - Application
        - Database connection
        - Blob backend in use
        """
        db_healthy = False
        if app.state.clients is not None:
            db_healthy = await app.state.clients.healthy()

        return HealthResponse(
            status="healthy" if db_healthy else "degraded",
            version=__version__,
            database=db_healthy,
            blob_backend=settings.BLOB_BACKEND.value,
        )

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        """Root endpoint with basic info."""
        return {
            "name": "Showcase Catalog",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    @app.get("/api/v1/status", tags=["API"])
    async def api_status() -> dict[str, Any]:
        """API status and version information."""
        return {
            "api_version": "v1",
            "app_version": __version__,
            "environment": settings.ENVIRONMENT.value,
            "blob_backend": settings.BLOB_BACKEND.value,
            "cdn_host": settings.CDN_HOST,
            "usage_folders": list(settings.USAGE_FOLDERS),
        }

    return app


app = create_app()


# Entry point for development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "showcase.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().DEBUG,
    )
