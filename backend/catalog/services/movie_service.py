"""Movie resource manager.

Validates and mutates movies under optimistic concurrency control and
implements the filtered, paginated listing.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.errors import EditConflict, NotFound
from catalog.core.validator import Validator, byte_length, permitted_value, unique
from catalog.models.movie import Movie
from catalog.repositories import movies
from catalog.schemas.movie import PageMetadata

logger = logging.getLogger(__name__)

_INT64_MAX = 2**63 - 1
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
MAX_PAGE = 10_000_000
MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20
SORT_SAFELIST = ("id", "title", "year", "runtime", "-id", "-title", "-year", "-runtime")


@dataclass
class MovieFilters:
    """Parsed and validated listing parameters."""

    title: str | None = None
    genres: list[str] = field(default_factory=list)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort: str = "id"


def parse_id(raw: int | str) -> int:
    """Return a positive int64 id; anything else is ``NotFound``."""
    if isinstance(raw, bool):
        raise NotFound()
    if isinstance(raw, int):
        movie_id = raw
    else:
        if not raw.isascii() or not raw.isdigit():
            raise NotFound()
        movie_id = int(raw)
    if movie_id < 1 or movie_id > _INT64_MAX:
        raise NotFound()
    return movie_id


def validate_movie(
    v: Validator,
    *,
    title: str | None,
    year: int | None,
    runtime: int | None,
    genres: list[str] | None,
) -> None:
    v.check(bool(title), "title", "must be provided")
    v.check(
        title is None or byte_length(title) <= 500,
        "title",
        "must not be more than 500 bytes long",
    )

    v.check(year is not None and year != 0, "year", "must be provided")
    if year:
        v.check(year >= 1888, "year", "must be greater than or equal to 1888")
        v.check(year <= datetime.now(UTC).year, "year", "must not be in the future")

    v.check(runtime is not None and runtime != 0, "runtime", "must be provided")
    if runtime:
        v.check(runtime > 0, "runtime", "must be a positive integer")

    v.check(genres is not None, "genres", "must be provided")
    if genres is not None:
        v.check(len(genres) >= 1, "genres", "must contain at least 1 genre")
        v.check(len(genres) <= 5, "genres", "must not contain more than 5 genres")
        v.check(all(genres), "genres", "must not contain empty values")
        v.check(unique(genres), "genres", "must not contain duplicate values")


async def create_movie(
    session: AsyncSession,
    *,
    title: str | None,
    year: int | None,
    runtime: int | None,
    genres: list[str] | None,
) -> Movie:
    """Validate and persist a new movie at version 1."""
    v = Validator()
    validate_movie(v, title=title, year=year, runtime=runtime, genres=genres)
    v.raise_if_invalid()

    movie = await movies.insert(
        session, title=title, year=year, runtime=runtime, genres=list(genres)
    )
    logger.info("Created movie %s", movie.id)
    return movie


async def get_movie(session: AsyncSession, movie_id: int | str) -> Movie:
    """Return a movie or raise ``NotFound`` (malformed ids included)."""
    movie = await movies.get(session, parse_id(movie_id))
    if movie is None:
        raise NotFound()
    return movie


def _parse_expected_version(raw: int | str | None) -> int | None:
    if raw is None or isinstance(raw, int):
        return raw
    try:
        return int(raw.strip())
    except ValueError:
        # a version that cannot be parsed can never match the stored one
        raise EditConflict() from None


async def update_movie(
    session: AsyncSession,
    movie_id: int | str,
    *,
    changes: dict[str, Any],
    expected_version: int | str | None = None,
) -> Movie:
    """Apply a partial update guarded by the movie's version.

    Fields absent from ``changes`` keep their stored values; the merged
    record is validated as a whole. A stale ``expected_version`` or a
    concurrent write raises ``EditConflict``; nothing is merged automatically.
    """
    movie = await get_movie(session, movie_id)
    expected = _parse_expected_version(expected_version)
    if expected is not None and expected != movie.version:
        raise EditConflict()

    merged = {
        "title": movie.title,
        "year": movie.year,
        "runtime": movie.runtime,
        "genres": movie.genres,
    }
    merged.update(
        {key: value for key, value in changes.items() if key in merged and value is not None}
    )

    v = Validator()
    validate_movie(v, **merged)
    v.raise_if_invalid()

    stored_id, stored_version = movie.id, movie.version
    updated = await movies.update_if_version(
        session, movie, version=stored_version, **merged
    )
    if not updated:
        raise EditConflict()
    logger.info("Updated movie %s to version %s", stored_id, stored_version + 1)
    return movie


async def delete_movie(session: AsyncSession, movie_id: int | str) -> None:
    """Delete a movie; deleting a missing movie raises ``NotFound``."""
    movie = await get_movie(session, movie_id)
    stored_id = movie.id
    if not await movies.delete(session, stored_id):
        raise NotFound()
    logger.info("Deleted movie %s", stored_id)


def _parse_int(v: Validator, key: str, raw: str | None, default: int) -> int:
    if raw is None or raw == "":
        return default
    if _INTEGER_PATTERN.fullmatch(raw) is None:
        v.add_error(key, "must be an integer value")
        return default
    return int(raw)


def parse_filters(
    *,
    title: str | None = None,
    genres: str | None = None,
    page: str | None = None,
    page_size: str | None = None,
    sort: str | None = None,
) -> MovieFilters:
    """Parse raw query-string values, raising ``ValidationError`` on bad input."""
    v = Validator()
    filters = MovieFilters(
        title=title or None,
        genres=[genre for genre in (genres or "").split(",") if genre],
        page=_parse_int(v, "page", page, 1),
        page_size=_parse_int(v, "page_size", page_size, DEFAULT_PAGE_SIZE),
        sort=sort or "id",
    )
    v.check(filters.page > 0, "page", "must be greater than zero")
    v.check(filters.page <= MAX_PAGE, "page", "must be a maximum of 10 million")
    v.check(filters.page_size > 0, "page_size", "must be greater than zero")
    v.check(
        filters.page_size <= MAX_PAGE_SIZE, "page_size", "must be a maximum of 100"
    )
    v.check(
        permitted_value(filters.sort, *SORT_SAFELIST), "sort", "invalid sort value"
    )
    v.raise_if_invalid()
    return filters


def calculate_metadata(
    total_records: int, page: int, page_size: int
) -> PageMetadata | None:
    """Return pagination metadata, or None when nothing matched."""
    if total_records == 0:
        return None
    return PageMetadata(
        current_page=page,
        page_size=page_size,
        first_page=1,
        last_page=math.ceil(total_records / page_size),
        total_records=total_records,
    )


async def list_movies(
    session: AsyncSession, filters: MovieFilters
) -> tuple[Sequence[Movie], PageMetadata | None]:
    """Return one page of movies matching ``filters`` plus its metadata."""
    records, total = await movies.query(
        session,
        title=filters.title,
        genres=filters.genres,
        page=filters.page,
        page_size=filters.page_size,
        sort=filters.sort,
    )
    return records, calculate_metadata(total, filters.page, filters.page_size)
