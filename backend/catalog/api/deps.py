"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.errors import InvalidToken
from catalog.core.security import TOKEN_PLAINTEXT_LENGTH
from catalog.db.session import get_session
from catalog.models.token import TokenScope
from catalog.models.user import User
from catalog.services import movie_service, token_service


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


async def get_current_user(
    request: Request,
    response: Response,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> User | None:
    """Resolve the bearer token to a user; no header means anonymous (None)."""
    response.headers["Vary"] = "Authorization"
    header = request.headers.get("Authorization")
    if not header:
        return None

    scheme, _, plaintext = header.partition(" ")
    if scheme != "Bearer" or len(plaintext) != TOKEN_PLAINTEXT_LENGTH:
        raise InvalidToken()
    return await token_service.get_user_for_token(
        session, plaintext, scope=TokenScope.AUTHENTICATION
    )


async def require_authenticated_user(
    current_user: Annotated[User | None, Depends(get_current_user)],
) -> User:
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="you must be authenticated to access this resource",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


async def require_activated_user(
    current_user: Annotated[User, Depends(require_authenticated_user)],
) -> User:
    """Ensure the caller's account has been activated."""
    if not current_user.activated:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="your user account must be activated to access this resource",
        )
    return current_user


def movie_id_param(movie_id: str) -> int:
    """Parse the ``{movie_id}`` path segment; malformed ids are 404s."""
    return movie_service.parse_id(movie_id)
