"""User persistence."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models.user import User
from catalog.repositories.base import store_errors


class DuplicateEmailError(Exception):
    """Raised when the unique email constraint rejects an insert."""


async def get(session: AsyncSession, user_id: int) -> User | None:
    """Return a user by ID."""
    async with store_errors(session):
        result = await session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()


async def get_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a user by (lower-cased) email address."""
    async with store_errors(session):
        result = await session.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()


async def insert(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password_hash: bytes,
    activated: bool = False,
    commit: bool = True,
) -> User:
    """Persist a new user at version 1.

    With ``commit=False`` the row is only flushed, which assigns its id and
    surfaces a duplicate email, and the caller owns the transaction.
    """
    user = User(
        name=name,
        email=email.lower(),
        password_hash=password_hash,
        activated=activated,
        version=1,
    )
    async with store_errors(session):
        session.add(user)
        try:
            if commit:
                await session.commit()
            else:
                await session.flush()
        except IntegrityError as exc:
            await session.rollback()
            raise DuplicateEmailError(email) from exc
        if commit:
            await session.refresh(user)
    return user


async def update_if_version(
    session: AsyncSession,
    user: User,
    *,
    version: int,
    name: str,
    email: str,
    password_hash: bytes,
    activated: bool,
    commit: bool = True,
) -> bool:
    """Conditionally write a user and bump its version in one statement.

    With ``commit=False`` the UPDATE runs inside the caller's transaction.
    """
    async with store_errors(session):
        try:
            result = await session.execute(
                update(User)
                .where(User.id == user.id, User.version == version)
                .values(
                    name=name,
                    email=email.lower(),
                    password_hash=password_hash,
                    activated=activated,
                    version=User.version + 1,
                )
            )
        except IntegrityError as exc:
            await session.rollback()
            raise DuplicateEmailError(email) from exc
        if not commit:
            return result.rowcount > 0
        if result.rowcount == 0:
            await session.commit()
            return False
        await session.commit()
        await session.refresh(user)
    return True
