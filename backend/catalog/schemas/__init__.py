"""Schema exports."""

from catalog.schemas.auth import (
    ActivationRequest,
    AuthenticationRequest,
    AuthenticationTokenEnvelope,
    TokenRead,
)
from catalog.schemas.movie import (
    MovieEnvelope,
    MovieInput,
    MovieListResponse,
    MovieRead,
    PageMetadata,
)
from catalog.schemas.user import UserCreate, UserEnvelope, UserRead

__all__ = [
    "ActivationRequest",
    "AuthenticationRequest",
    "AuthenticationTokenEnvelope",
    "MovieEnvelope",
    "MovieInput",
    "MovieListResponse",
    "MovieRead",
    "PageMetadata",
    "TokenRead",
    "UserCreate",
    "UserEnvelope",
    "UserRead",
]
