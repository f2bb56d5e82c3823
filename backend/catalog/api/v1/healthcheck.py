"""Health check endpoints."""

from typing import Any

from fastapi import APIRouter

from catalog.core.config import get_settings

router = APIRouter()


@router.get("", summary="Service health status")
async def healthcheck() -> dict[str, Any]:
    """Return application availability and build metadata."""
    settings = get_settings()
    return {
        "status": "available",
        "system_info": {
            "environment": settings.app_env,
            "version": settings.app_version,
        },
    }
