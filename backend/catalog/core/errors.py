"""Domain error taxonomy raised by the service layer.

Services raise these exceptions and never translate one kind into another.
The HTTP layer (``catalog.api.errors``) maps each kind to a status code and
the ``{"error": ...}`` envelope.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every error the catalog services raise."""

    message = "the server encountered a problem and could not process your request"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(CatalogError):
    """Field-level validation failure; ``errors`` maps field to message."""

    message = "validation failed"

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__()
        self.errors = dict(errors)

    def __str__(self) -> str:
        return f"validation failed: {self.errors}"


class BadRequest(CatalogError):
    """Malformed request envelope detected before business validation."""

    message = "the request could not be understood"


class NotFound(CatalogError):
    """The record is absent or must be treated as absent."""

    message = "the requested resource could not be found"


class EditConflict(CatalogError):
    """The record version changed since it was read."""

    message = "unable to update the record due to an edit conflict, please try again"


class InvalidCredentials(CatalogError):
    """Login failed; deliberately does not say which field was wrong."""

    message = "invalid authentication credentials"


class InvalidToken(CatalogError):
    """The token is unknown, expired, or issued for another scope."""

    message = "invalid or missing authentication token"


class StoreError(CatalogError):
    """Opaque storage failure; not retried by the services."""


__all__ = [
    "BadRequest",
    "CatalogError",
    "EditConflict",
    "InvalidCredentials",
    "InvalidToken",
    "NotFound",
    "StoreError",
    "ValidationError",
]
