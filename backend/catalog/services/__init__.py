"""Service layer exports."""
from catalog.services import (
    auth_service,
    movie_service,
    token_service,
    user_service,
)

__all__ = [
    "auth_service",
    "movie_service",
    "token_service",
    "user_service",
]
