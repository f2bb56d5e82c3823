"""Record store: persistence primitives for each entity type.

Repositories issue SQL and translate driver failures into ``StoreError``;
validation and business rules live in ``catalog.services``.
"""

from catalog.repositories import movies, tokens, users
from catalog.repositories.base import commit

__all__ = ["commit", "movies", "tokens", "users"]
