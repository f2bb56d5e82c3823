"""Authentication service helpers."""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.config import get_settings
from catalog.core.errors import InvalidCredentials
from catalog.core.security import get_password_hash, verify_password
from catalog.core.validator import Validator
from catalog.models.token import TokenScope
from catalog.services import token_service, user_service
from catalog.services.token_service import IssuedToken


@lru_cache
def _placeholder_hash() -> bytes:
    return get_password_hash("placeholder-password")


async def authenticate(
    session: AsyncSession, *, email: str | None, password: str | None
) -> IssuedToken:
    """Check credentials and issue an authentication token.

    An unknown email and a wrong password raise the same
    ``InvalidCredentials``; the unknown-email path still runs a bcrypt
    comparison so both take similar time.
    """
    v = Validator()
    user_service.validate_email_address(v, email)
    user_service.validate_password_plaintext(v, password)
    v.raise_if_invalid()

    user = await user_service.get_user_by_email(session, email)
    if user is None:
        verify_password(password, _placeholder_hash())
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentials()

    ttl = timedelta(hours=get_settings().authentication_token_ttl_hours)
    return await token_service.issue_token(
        session, user_id=user.id, ttl=ttl, scope=TokenScope.AUTHENTICATION
    )

