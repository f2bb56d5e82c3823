"""Hashed bearer and activation tokens."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, Enum, ForeignKey, Index, LargeBinary
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.db.base import Base

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from catalog.models.user import User


class TokenScope(str, enum.Enum):
    """What a token may be used for."""

    ACTIVATION = "activation"
    AUTHENTICATION = "authentication"


class Token(Base):
    """Stores the SHA-256 digest of a token; the plaintext is never kept."""

    __tablename__ = "tokens"
    __table_args__ = (Index("ix_tokens_user_scope", "user_id", "scope"),)

    hash: Mapped[bytes] = mapped_column(LargeBinary(32), primary_key=True)
    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    expiry: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    scope: Mapped[TokenScope] = mapped_column(Enum(TokenScope), nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="tokens")
