"""Application lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from .core.config import get_settings
from .core.logging import get_logger
from .services.documents import DocumentService
from .services.storage import StorageService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "application_startup",
        storage_dir=settings.storage_dir,
        remote_sync=settings.remote_sync_enabled,
        seller_state_code=settings.seller_state_code,
    )

    http_client = httpx.AsyncClient(timeout=httpx.Timeout(10.0))
    app.state.http_client = http_client

    storage_service = StorageService(settings=settings, http_client=http_client)
    app.state.storage_service = storage_service
    app.state.document_service = DocumentService(storage_service, settings)

    try:
        yield
    finally:
        logger.info("application_shutdown")
        await http_client.aclose()
