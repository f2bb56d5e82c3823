"""User accounts."""
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.db.base import Base
from catalog.models.mixins import BigIntegerPK, CreatedAtMixin, VersionedMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from catalog.models.token import Token


class User(CreatedAtMixin, VersionedMixin, Base):
    """Registered account; created inactive and activated once."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    activated: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    tokens: Mapped[list["Token"]] = relationship(
        "Token",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
