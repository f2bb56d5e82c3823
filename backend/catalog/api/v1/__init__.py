"""Versioned API router."""

from fastapi import APIRouter

from . import healthcheck, movies, tokens, users

router = APIRouter()
router.include_router(healthcheck.router, prefix="/healthcheck", tags=["health"])
router.include_router(movies.router, prefix="/movies", tags=["movies"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(tokens.router, prefix="/tokens", tags=["tokens"])
