"""
Health check router.
"""
from fastapi import APIRouter

from gallery.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Liveness probe")
async def health() -> dict:
    settings = get_settings()
    return {"status": "ok", "version": settings.app_version}
