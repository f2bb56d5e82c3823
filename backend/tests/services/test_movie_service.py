"""Tests for movie persistence and optimistic concurrency."""

from __future__ import annotations

import pytest

from catalog.core.errors import NotFound, ValidationError
from catalog.db.session import get_sessionmaker
from catalog.repositories import movies
from catalog.services import movie_service

pytestmark = pytest.mark.asyncio

_FIELDS = {"title": "Heat", "year": 1995, "runtime": 170, "genres": ["crime", "thriller"]}


async def test_create_movie_starts_at_version_one(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        movie = await movie_service.create_movie(session, **_FIELDS)

    assert movie.id > 0
    assert movie.version == 1
    assert movie.genres == ["crime", "thriller"]


async def test_create_movie_zero_runtime_is_missing(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(ValidationError) as excinfo:
            await movie_service.create_movie(session, **{**_FIELDS, "runtime": 0})

    assert excinfo.value.errors == {"runtime": "must be provided"}


async def test_concurrent_updates_only_one_wins(reset_database, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        movie = await movie_service.create_movie(session, **_FIELDS)
    movie_id = movie.id

    async with sessionmaker() as first, sessionmaker() as second:
        # both writers read version 1 before either writes
        await movie_service.get_movie(first, movie_id)
        stale = await movie_service.get_movie(second, movie_id)
        assert stale.version == 1

        updated = await movie_service.update_movie(
            first, movie_id, changes={"title": "Heat (1995)"}
        )
        assert updated.version == 2

        written = await movies.update_if_version(
            second,
            stale,
            version=1,
            title="Lost Update",
            year=stale.year,
            runtime=stale.runtime,
            genres=stale.genres,
        )
        assert written is False

    async with sessionmaker() as session:
        stored = await movie_service.get_movie(session, movie_id)
    assert stored.title == "Heat (1995)"
    assert stored.version == 2


async def test_update_missing_movie_is_not_found(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(NotFound):
            await movie_service.update_movie(session, 99, changes={"title": "x"})


async def test_update_ignores_null_fields(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        movie = await movie_service.create_movie(session, **_FIELDS)
        updated = await movie_service.update_movie(
            session, movie.id, changes={"title": None, "runtime": 171}
        )

    assert updated.title == "Heat"
    assert updated.runtime == 171
    assert updated.version == 2


async def test_delete_removes_genres(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        movie = await movie_service.create_movie(session, **_FIELDS)
        await movie_service.delete_movie(session, movie.id)

        with pytest.raises(NotFound):
            await movie_service.delete_movie(session, movie.id)
        records, metadata = await movie_service.list_movies(
            session, movie_service.parse_filters(genres="crime")
        )

    assert list(records) == []
    assert metadata is None


async def test_list_movies_ties_break_on_id(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        first = await movie_service.create_movie(session, **_FIELDS)
        second = await movie_service.create_movie(
            session, **{**_FIELDS, "title": "Heat 2"}
        )
        records, _ = await movie_service.list_movies(
            session, movie_service.parse_filters(sort="-year")
        )

    assert [movie.id for movie in records] == [first.id, second.id]
