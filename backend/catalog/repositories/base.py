"""Shared helpers for repository modules."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.errors import StoreError


@asynccontextmanager
async def store_errors(session: AsyncSession) -> AsyncIterator[None]:
    """Roll back and re-raise driver failures as ``StoreError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StoreError() from exc


async def commit(session: AsyncSession, *refresh: object) -> None:
    """Commit the pending unit of work, then reload ``refresh`` instances.

    Used by services that stage several writes with ``commit=False`` so they
    land in a single transaction.
    """
    async with store_errors(session):
        await session.commit()
        for instance in refresh:
            await session.refresh(instance)
