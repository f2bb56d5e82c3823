"""ORM models package export."""

from catalog.models.movie import Movie, MovieGenre
from catalog.models.token import Token, TokenScope
from catalog.models.user import User

__all__ = ["Movie", "MovieGenre", "Token", "TokenScope", "User"]
