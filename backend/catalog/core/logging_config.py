"""Process-wide logging setup."""

from __future__ import annotations

import logging

from asgi_correlation_id import CorrelationIdFilter

from catalog.core.config import get_settings
from catalog.security.logging_filters import SensitiveFilter

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def configure_logging() -> None:
    """Attach the console handler and redaction filters once."""
    settings = get_settings()
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())

    if not any(getattr(h, "_catalog_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.addFilter(CorrelationIdFilter(uuid_length=32, default_value="-"))
        handler.addFilter(SensitiveFilter())
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._catalog_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", ""):
        logger = logging.getLogger(logger_name)
        if not any(isinstance(flt, SensitiveFilter) for flt in logger.filters):
            logger.addFilter(SensitiveFilter())
