"""Initial catalog schema: users, tokens, movies and movie genres.

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

_BIGINT_PK = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", _BIGINT_PK, primary_key=True, autoincrement=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("password_hash", sa.LargeBinary(), nullable=False),
        sa.Column(
            "activated", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
    )

    op.create_table(
        "tokens",
        sa.Column("hash", sa.LargeBinary(length=32), primary_key=True),
        sa.Column(
            "user_id",
            sa.BigInteger(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("expiry", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "scope",
            sa.Enum("ACTIVATION", "AUTHENTICATION", name="tokenscope"),
            nullable=False,
        ),
    )
    op.create_index("ix_tokens_user_scope", "tokens", ["user_id", "scope"])

    op.create_table(
        "movies",
        sa.Column("id", _BIGINT_PK, primary_key=True, autoincrement=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("runtime", sa.Integer(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.CheckConstraint("runtime >= 0", name="ck_movies_runtime"),
        sa.CheckConstraint("year >= 1888", name="ck_movies_year"),
    )

    op.create_table(
        "movie_genres",
        sa.Column(
            "movie_id",
            sa.BigInteger(),
            sa.ForeignKey("movies.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("position", sa.Integer(), primary_key=True),
        sa.Column("genre", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_movie_genres_genre", "movie_genres", ["genre"])


def downgrade() -> None:
    op.drop_index("ix_movie_genres_genre", table_name="movie_genres")
    op.drop_table("movie_genres")
    op.drop_table("movies")
    op.drop_index("ix_tokens_user_scope", table_name="tokens")
    op.drop_table("tokens")
    op.drop_table("users")
    sa.Enum(name="tokenscope").drop(op.get_bind(), checkfirst=True)
