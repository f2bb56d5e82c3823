"""Tests for token issue, validation and purging."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import delete, func, select

from catalog.core.errors import InvalidToken
from catalog.core.security import get_password_hash, hash_token
from catalog.db.session import get_sessionmaker
from catalog.models import Token, TokenScope, User
from catalog.services import token_service

pytestmark = pytest.mark.asyncio


async def _seed_user(session) -> User:
    user = User(
        name="Token Owner",
        email="owner@example.com",
        password_hash=get_password_hash("pa55word"),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def test_issue_token_stores_only_the_digest(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        user = await _seed_user(session)
        issued = await token_service.issue_token(
            session,
            user_id=user.id,
            ttl=timedelta(hours=1),
            scope=TokenScope.AUTHENTICATION,
        )
        stored = (await session.execute(select(Token))).scalars().all()

    assert len(issued.plaintext) == 26
    assert issued.plaintext not in repr(issued)
    assert [token.hash for token in stored] == [hash_token(issued.plaintext)]


async def test_validate_token_checks_scope_and_expiry(
    reset_database, db_url: str
) -> None:
    async with get_sessionmaker(db_url)() as session:
        user = await _seed_user(session)
        live = await token_service.issue_token(
            session,
            user_id=user.id,
            ttl=timedelta(hours=1),
            scope=TokenScope.ACTIVATION,
        )
        expired = await token_service.issue_token(
            session,
            user_id=user.id,
            ttl=timedelta(seconds=-1),
            scope=TokenScope.ACTIVATION,
        )

        assert (
            await token_service.validate_token(
                session, live.plaintext, scope=TokenScope.ACTIVATION
            )
            == user.id
        )
        with pytest.raises(InvalidToken):
            await token_service.validate_token(
                session, live.plaintext, scope=TokenScope.AUTHENTICATION
            )
        with pytest.raises(InvalidToken):
            await token_service.validate_token(
                session, expired.plaintext, scope=TokenScope.ACTIVATION
            )
        with pytest.raises(InvalidToken):
            await token_service.validate_token(
                session, "A" * 26, scope=TokenScope.ACTIVATION
            )


async def test_purge_tokens_only_touches_one_scope(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        user = await _seed_user(session)
        for _ in range(2):
            await token_service.issue_token(
                session,
                user_id=user.id,
                ttl=timedelta(hours=1),
                scope=TokenScope.ACTIVATION,
            )
        bearer = await token_service.issue_token(
            session,
            user_id=user.id,
            ttl=timedelta(hours=1),
            scope=TokenScope.AUTHENTICATION,
        )

        removed = await token_service.purge_tokens(
            session, user_id=user.id, scope=TokenScope.ACTIVATION
        )
        owner = await token_service.get_user_for_token(
            session, bearer.plaintext, scope=TokenScope.AUTHENTICATION
        )

    assert removed == 2
    assert owner.id == user.id



async def test_deleting_a_user_deletes_its_tokens(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        user = await _seed_user(session)
        for scope in (TokenScope.ACTIVATION, TokenScope.AUTHENTICATION):
            await token_service.issue_token(
                session, user_id=user.id, ttl=timedelta(hours=1), scope=scope
            )

        # a plain DELETE so only the foreign key cascade can remove the tokens
        await session.execute(delete(User).where(User.id == user.id))
        await session.commit()
        remaining = await session.scalar(select(func.count()).select_from(Token))

    assert remaining == 0
