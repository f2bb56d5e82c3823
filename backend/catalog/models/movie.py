"""Movie catalog models."""
from __future__ import annotations

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.db.base import Base
from catalog.models.mixins import BigIntegerPK, CreatedAtMixin, VersionedMixin


class Movie(CreatedAtMixin, VersionedMixin, Base):
    """A catalog entry; ``version`` guards concurrent edits."""

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    runtime: Mapped[int] = mapped_column(Integer, nullable=False)

    genre_rows: Mapped[list["MovieGenre"]] = relationship(
        "MovieGenre",
        back_populates="movie",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MovieGenre.position",
        lazy="selectin",
    )

    @property
    def genres(self) -> list[str]:
        return [row.genre for row in self.genre_rows]

    @genres.setter
    def genres(self, values: list[str]) -> None:
        self.genre_rows = [
            MovieGenre(position=index, genre=genre) for index, genre in enumerate(values)
        ]


class MovieGenre(Base):
    """One genre of a movie, kept in submission order."""

    __tablename__ = "movie_genres"

    movie_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    genre: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    movie: Mapped[Movie] = relationship("Movie", back_populates="genre_rows")
