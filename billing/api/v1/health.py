"""Health and version endpoints"""
from fastapi import APIRouter, Depends, Request

from ...core.config import Settings, get_settings

router = APIRouter()


@router.get("/health")
async def health(request: Request, settings: Settings = Depends(get_settings)):
    """Liveness check"""
    storage = getattr(request.app.state, "storage_service", None)
    return {
        "ok": True,
        "version": settings.app_version,
        "cloud_sync": bool(storage and storage.cloud_enabled),
    }


@router.get("/version")
async def version(settings: Settings = Depends(get_settings)):
    """Version and seller jurisdiction"""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
        "seller_place_of_supply": settings.seller_place_of_supply,
    }
