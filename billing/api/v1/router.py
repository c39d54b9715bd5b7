"""Versioned API router registration."""

from fastapi import APIRouter

from .compute import router as compute_router
from .dashboard import router as dashboard_router
from .documents import router as documents_router
from .health import router as health_router


def create_v1_router() -> APIRouter:
    """Create and configure v1 API router"""
    router = APIRouter(prefix="/v1")

    router.include_router(health_router, tags=["health"])
    router.include_router(compute_router, tags=["compute"])
    router.include_router(dashboard_router, tags=["dashboard"])
    # Collection routes last: "/{collection}" would otherwise shadow fixed paths.
    router.include_router(documents_router, tags=["documents"])

    return router
