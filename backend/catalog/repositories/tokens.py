"""Token persistence; only digests ever reach the database."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models.token import Token, TokenScope
from catalog.repositories.base import store_errors


async def insert(
    session: AsyncSession,
    *,
    token_hash: bytes,
    user_id: int,
    expiry: datetime,
    scope: TokenScope,
    commit: bool = True,
) -> None:
    """Store a token digest; with ``commit=False`` it is only flushed."""
    async with store_errors(session):
        session.add(
            Token(hash=token_hash, user_id=user_id, expiry=expiry, scope=scope)
        )
        if commit:
            await session.commit()
        else:
            await session.flush()


async def get_user_id(
    session: AsyncSession,
    *,
    token_hash: bytes,
    scope: TokenScope,
    now: datetime,
) -> int | None:
    """Return the owner of an unexpired token with the given scope."""
    async with store_errors(session):
        result = await session.execute(
            select(Token.user_id).where(
                Token.hash == token_hash,
                Token.scope == scope,
                Token.expiry > now,
            )
        )
        return result.scalar_one_or_none()


async def delete_all_for_user(
    session: AsyncSession, *, scope: TokenScope, user_id: int, commit: bool = True
) -> int:
    """Delete every token of ``scope`` owned by the user; returns the count."""
    async with store_errors(session):
        result = await session.execute(
            delete(Token).where(Token.scope == scope, Token.user_id == user_id)
        )
        if commit:
            await session.commit()
    return result.rowcount
