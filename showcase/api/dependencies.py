"""FastAPI dependencies resolving the shared clients built at startup."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from showcase.catalog import CatalogStore
from showcase.clients import ShowcaseClients
from showcase.config import Settings
from showcase.ingestion import IngestionOrchestrator
from showcase.storage.usage import UsageAggregator


def get_clients(request: Request) -> ShowcaseClients:
    """Clients attached to the application at startup.

    Raises:
        HTTPException 503: If the application has not finished starting.
    """
    clients = getattr(request.app.state, "clients", None)
    if clients is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up",
        )
    return clients


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> CatalogStore:
    return get_clients(request).catalog


def get_orchestrator(request: Request) -> IngestionOrchestrator:
    return get_clients(request).orchestrator


def get_usage_aggregator(request: Request) -> UsageAggregator:
    return get_clients(request).usage
