"""Movie persistence, including the version-checked write."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models.movie import Movie, MovieGenre
from catalog.repositories.base import store_errors

_SORT_COLUMNS = {
    "id": Movie.id,
    "title": Movie.title,
    "year": Movie.year,
    "runtime": Movie.runtime,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def get(session: AsyncSession, movie_id: int) -> Movie | None:
    """Return a movie by ID."""
    async with store_errors(session):
        result = await session.execute(
            select(Movie)
            .where(Movie.id == movie_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()


async def insert(
    session: AsyncSession,
    *,
    title: str,
    year: int,
    runtime: int,
    genres: list[str],
) -> Movie:
    """Persist a new movie at version 1."""
    movie = Movie(title=title, year=year, runtime=runtime, version=1)
    movie.genres = genres
    async with store_errors(session):
        session.add(movie)
        await session.commit()
        await session.refresh(movie)
    return movie


async def update_if_version(
    session: AsyncSession,
    movie: Movie,
    *,
    version: int,
    title: str,
    year: int,
    runtime: int,
    genres: list[str],
) -> bool:
    """Write new values only if the stored version still equals ``version``.

    The check and the increment happen in one UPDATE statement; genre rows
    are replaced in the same transaction. Returns False when no row matched.
    """
    movie_id = movie.id
    async with store_errors(session):
        result = await session.execute(
            update(Movie)
            .where(Movie.id == movie_id, Movie.version == version)
            .values(
                title=title,
                year=year,
                runtime=runtime,
                version=Movie.version + 1,
            )
        )
        if result.rowcount == 0:
            # nothing was written; close the transaction without expiring state
            await session.commit()
            return False
        movie.genres = genres
        await session.commit()
        await session.refresh(movie)
    return True


async def delete(session: AsyncSession, movie_id: int) -> bool:
    """Remove a movie; returns False when nothing was deleted."""
    async with store_errors(session):
        result = await session.execute(
            sa_delete(Movie).where(Movie.id == movie_id)
        )
        await session.commit()
    return result.rowcount > 0


async def query(
    session: AsyncSession,
    *,
    title: str | None,
    genres: Sequence[str],
    page: int,
    page_size: int,
    sort: str,
) -> tuple[Sequence[Movie], int]:
    """Return one page of matching movies and the total number of matches."""
    stmt = select(Movie)
    if title:
        stmt = stmt.where(Movie.title.ilike(f"%{_escape_like(title)}%", escape="\\"))
    wanted = sorted(set(genres))
    if wanted:
        covering = (
            select(MovieGenre.movie_id)
            .where(MovieGenre.genre.in_(wanted))
            .group_by(MovieGenre.movie_id)
            .having(func.count(func.distinct(MovieGenre.genre)) == len(wanted))
        )
        stmt = stmt.where(Movie.id.in_(covering))

    column = _SORT_COLUMNS[sort.lstrip("-")]
    ordering = column.desc() if sort.startswith("-") else column.asc()

    async with store_errors(session):
        total = (
            await session.execute(select(func.count()).select_from(stmt.subquery()))
        ).scalar_one()
        result = await session.execute(
            stmt.order_by(ordering, Movie.id.asc())
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        return result.scalars().all(), total
