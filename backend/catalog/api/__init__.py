"""API router modules."""

from fastapi import APIRouter, Depends

from catalog.api.deps import get_current_user
from catalog.core.config import get_settings

from .v1 import router as api_v1_router

settings = get_settings()

# Every request resolves its bearer token up front; a bad token is a 401
# even on routes that allow anonymous access.
api_router = APIRouter()
api_router.include_router(
    api_v1_router,
    prefix=settings.api_v1_prefix,
    dependencies=[Depends(get_current_user)],
)

__all__ = ["api_router"]
