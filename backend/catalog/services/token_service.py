"""Token manager: issue, validate and purge scoped tokens.

A token moves through ``issued -> valid (now < expiry) -> consumed | expired``.
Consumption is deletion (activation tokens); authentication tokens simply
run out. Only the SHA-256 digest is stored, so an issued plaintext exists
solely inside the returned ``IssuedToken``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.errors import InvalidToken
from catalog.core.security import (
    TOKEN_PLAINTEXT_LENGTH,
    generate_token_plaintext,
    hash_token,
)
from catalog.core.validator import Validator, byte_length
from catalog.models.token import TokenScope
from catalog.models.user import User
from catalog.repositories import tokens, users

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedToken:
    """A newly issued token; ``plaintext`` is kept out of reprs and logs."""

    plaintext: str = field(repr=False)
    user_id: int
    expiry: datetime
    scope: TokenScope


def validate_token_plaintext(v: Validator, plaintext: str | None) -> None:
    v.check(bool(plaintext), "token", "must be provided")
    v.check(
        plaintext is not None and byte_length(plaintext) == TOKEN_PLAINTEXT_LENGTH,
        "token",
        f"must be {TOKEN_PLAINTEXT_LENGTH} bytes long",
    )


async def issue_token(
    session: AsyncSession,
    *,
    user_id: int,
    ttl: timedelta,
    scope: TokenScope,
    commit: bool = True,
) -> IssuedToken:
    """Generate a token, persist its digest and return the plaintext once.

    Pass ``commit=False`` to stage the token in the caller's transaction.
    """
    plaintext = generate_token_plaintext()
    expiry = datetime.now(UTC) + ttl
    await tokens.insert(
        session,
        token_hash=hash_token(plaintext),
        user_id=user_id,
        expiry=expiry,
        scope=scope,
        commit=commit,
    )
    logger.info("Issued %s token for user %s", scope.value, user_id)
    return IssuedToken(plaintext=plaintext, user_id=user_id, expiry=expiry, scope=scope)


async def validate_token(
    session: AsyncSession, plaintext: str, *, scope: TokenScope
) -> int:
    """Return the owning user id, or raise ``InvalidToken``.

    Unknown, expired and wrong-scope tokens are indistinguishable.
    """
    user_id = await tokens.get_user_id(
        session,
        token_hash=hash_token(plaintext),
        scope=scope,
        now=datetime.now(UTC),
    )
    if user_id is None:
        raise InvalidToken()
    return user_id


async def get_user_for_token(
    session: AsyncSession, plaintext: str, *, scope: TokenScope
) -> User:
    """Resolve a valid token to its user."""
    user_id = await validate_token(session, plaintext, scope=scope)
    user = await users.get(session, user_id)
    if user is None:
        raise InvalidToken()
    return user


async def purge_tokens(
    session: AsyncSession, *, user_id: int, scope: TokenScope, commit: bool = True
) -> int:
    """Delete every ``scope`` token owned by the user."""
    removed = await tokens.delete_all_for_user(
        session, scope=scope, user_id=user_id, commit=commit
    )
    logger.info("Purged %s %s token(s) for user %s", removed, scope.value, user_id)
    return removed
