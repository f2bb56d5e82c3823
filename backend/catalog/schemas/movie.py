"""Pydantic schemas for movies."""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer

_RUNTIME_PATTERN = re.compile(r"([+-]?[0-9]+) mins")
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1


def _parse_runtime(value: Any) -> Any:
    """Accept the ``"<n> mins"`` wire format and return the minutes."""
    if not isinstance(value, str):
        raise ValueError("invalid runtime format")
    match = _RUNTIME_PATTERN.fullmatch(value)
    if match is None:
        raise ValueError("invalid runtime format")
    minutes = int(match.group(1))
    if not _INT32_MIN <= minutes <= _INT32_MAX:
        raise ValueError("invalid runtime format")
    return minutes


def _read_runtime(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return _parse_runtime(value)


def _format_runtime(minutes: int) -> str:
    return f"{minutes} mins"


# Request bodies carry "<n> mins". Responses render the same string and are
# read back from either form.
RuntimeInput = Annotated[int, BeforeValidator(_parse_runtime)]
Runtime = Annotated[
    int,
    BeforeValidator(_read_runtime),
    PlainSerializer(_format_runtime, return_type=str),
]


class MovieInput(BaseModel):
    """Decoded movie body; every field is optional so PATCH can reuse it.

    Only JSON shape is checked here. Business rules run in
    ``catalog.services.movie_service``.
    """

    title: str | None = None
    year: int | None = None
    runtime: RuntimeInput | None = None
    genres: list[str] | None = None

    model_config = ConfigDict(extra="forbid", strict=True)


class MovieRead(BaseModel):
    """Serialized movie."""

    id: int
    title: str
    year: int
    runtime: Runtime
    genres: list[str]
    version: int

    model_config = ConfigDict(from_attributes=True)


class MovieEnvelope(BaseModel):
    movie: MovieRead


class PageMetadata(BaseModel):
    """Pagination details for client-side page-count computation."""

    current_page: int
    page_size: int
    first_page: int
    last_page: int
    total_records: int


class MovieListResponse(BaseModel):
    movies: list[MovieRead]
    metadata: PageMetadata | dict[str, Any]
