"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from secure import Secure

from catalog.api import api_router
from catalog.api.errors import register_exception_handlers
from catalog.core.config import get_settings
from catalog.core.logging_config import configure_logging
from catalog.db.session import dispose_engine

logger = logging.getLogger(__name__)

settings = get_settings()

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("Starting %s (%s)", settings.app_name, settings.app_env)
    try:
        yield
    finally:
        await dispose_engine()


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

_secure_headers = Secure.with_default_headers()


@app.middleware("http")
async def _apply_security_headers(request, call_next):
    response = await call_next(request)
    _secure_headers.set_headers(response)
    return response


register_exception_handlers(app)

app.include_router(api_router)
