"""Movie catalog endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.api import deps
from catalog.api.json_body import json_body
from catalog.core.config import get_settings
from catalog.schemas.movie import (
    MovieEnvelope,
    MovieInput,
    MovieListResponse,
    MovieRead,
)
from catalog.services import movie_service

router = APIRouter()

_settings = get_settings()

_WRITE_DEPS = [Depends(deps.require_activated_user)]


@router.get("", response_model=MovieListResponse, summary="List movies")
async def list_movies(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    title: str | None = Query(default=None),
    genres: str | None = Query(default=None),
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None),
    sort: str | None = Query(default=None),
) -> MovieListResponse:
    """Return a filtered, sorted page of movies."""
    filters = movie_service.parse_filters(
        title=title, genres=genres, page=page, page_size=page_size, sort=sort
    )
    records, metadata = await movie_service.list_movies(session, filters)
    return MovieListResponse(
        movies=[MovieRead.model_validate(movie) for movie in records],
        metadata=metadata if metadata is not None else {},
    )


@router.post(
    "",
    response_model=MovieEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create movie",
    dependencies=_WRITE_DEPS,
)
async def create_movie(
    payload: Annotated[MovieInput, Depends(json_body(MovieInput))],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    response: Response,
) -> MovieEnvelope:
    """Validate and store a new movie."""
    movie = await movie_service.create_movie(
        session,
        title=payload.title,
        year=payload.year,
        runtime=payload.runtime,
        genres=payload.genres,
    )
    response.headers["Location"] = f"{_settings.api_v1_prefix}/movies/{movie.id}"
    return MovieEnvelope(movie=MovieRead.model_validate(movie))


@router.get("/{movie_id}", response_model=MovieEnvelope, summary="Get movie")
async def get_movie(
    movie_id: Annotated[int, Depends(deps.movie_id_param)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> MovieEnvelope:
    """Fetch a single movie."""
    movie = await movie_service.get_movie(session, movie_id)
    return MovieEnvelope(movie=MovieRead.model_validate(movie))


@router.patch(
    "/{movie_id}",
    response_model=MovieEnvelope,
    summary="Update movie",
    dependencies=_WRITE_DEPS,
)
async def update_movie(
    movie_id: Annotated[int, Depends(deps.movie_id_param)],
    payload: Annotated[MovieInput, Depends(json_body(MovieInput))],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    expected_version: Annotated[
        str | None, Header(alias="X-Expected-Version")
    ] = None,
) -> MovieEnvelope:
    """Partially update a movie, guarded by its version."""
    movie = await movie_service.update_movie(
        session,
        movie_id,
        changes=payload.model_dump(exclude_unset=True),
        expected_version=expected_version,
    )
    return MovieEnvelope(movie=MovieRead.model_validate(movie))


@router.delete("/{movie_id}", summary="Delete movie", dependencies=_WRITE_DEPS)
async def delete_movie(
    movie_id: Annotated[int, Depends(deps.movie_id_param)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> dict[str, str]:
    """Delete a movie."""
    await movie_service.delete_movie(session, movie_id)
    return {"message": "movie successfully deleted"}
