"""User account manager: registration, activation and lookups."""
from __future__ import annotations

import logging
from datetime import timedelta

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.ext.asyncio import AsyncSession

from catalog import repositories
from catalog.core.config import get_settings
from catalog.core.errors import CatalogError, EditConflict, InvalidToken, ValidationError
from catalog.core.security import get_password_hash
from catalog.core.validator import Validator, byte_length
from catalog.models.token import TokenScope
from catalog.models.user import User
from catalog.repositories import users
from catalog.repositories.users import DuplicateEmailError
from catalog.services import token_service
from catalog.services.token_service import IssuedToken

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "a user with this email address already exists"
INVALID_ACTIVATION_TOKEN_MESSAGE = "invalid or expired activation token"


def _is_email_address(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_email_address(v: Validator, email: str | None) -> None:
    v.check(bool(email), "email", "must be provided")
    v.check(
        email is None or email == "" or _is_email_address(email),
        "email",
        "must be a valid email address",
    )


def validate_password_plaintext(v: Validator, password: str | None) -> None:
    v.check(bool(password), "password", "must be provided")
    if password:
        v.check(byte_length(password) >= 8, "password", "must be at least 8 bytes long")
        v.check(
            byte_length(password) <= 72, "password", "must not be more than 72 bytes long"
        )


def validate_user(
    v: Validator, *, name: str | None, email: str | None, password: str | None
) -> None:
    v.check(bool(name), "name", "must be provided")
    v.check(
        name is None or byte_length(name) <= 500,
        "name",
        "must not be more than 500 bytes long",
    )
    validate_email_address(v, email)
    validate_password_plaintext(v, password)


async def get_user(session: AsyncSession, user_id: int) -> User | None:
    """Return a user by ID."""
    return await users.get(session, user_id)


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a user by email address."""
    return await users.get_by_email(session, email)


async def register_user(
    session: AsyncSession,
    *,
    name: str | None,
    email: str | None,
    password: str | None,
) -> tuple[User, IssuedToken]:
    """Create an inactive account and issue its activation token.

    Delivering the token to the user is left to the caller.
    """
    v = Validator()
    validate_user(v, name=name, email=email, password=password)
    v.raise_if_invalid()

    if await users.get_by_email(session, email) is not None:
        raise ValidationError({"email": DUPLICATE_EMAIL_MESSAGE})

    # the account and its activation token commit together or not at all
    ttl = timedelta(hours=get_settings().activation_token_ttl_hours)
    try:
        user = await users.insert(
            session,
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            commit=False,
        )
        token = await token_service.issue_token(
            session,
            user_id=user.id,
            ttl=ttl,
            scope=TokenScope.ACTIVATION,
            commit=False,
        )
        await repositories.commit(session, user)
    except DuplicateEmailError as exc:
        raise ValidationError({"email": DUPLICATE_EMAIL_MESSAGE}) from exc
    except CatalogError:
        await session.rollback()
        raise
    logger.info("Registered user %s", user.id)
    return user, token


async def activate_user(session: AsyncSession, *, token_plaintext: str | None) -> User:
    """Activate the account owning ``token_plaintext`` and consume the token."""
    v = Validator()
    token_service.validate_token_plaintext(v, token_plaintext)
    v.raise_if_invalid()

    try:
        user = await token_service.get_user_for_token(
            session, token_plaintext, scope=TokenScope.ACTIVATION
        )
    except InvalidToken as exc:
        raise ValidationError({"token": INVALID_ACTIVATION_TOKEN_MESSAGE}) from exc

    # the activation and the token purge commit together
    try:
        updated = await users.update_if_version(
            session,
            user,
            version=user.version,
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
            activated=True,
            commit=False,
        )
        if not updated:
            raise EditConflict()
        await token_service.purge_tokens(
            session, user_id=user.id, scope=TokenScope.ACTIVATION, commit=False
        )
        await repositories.commit(session, user)
    except CatalogError:
        await session.rollback()
        raise
    logger.info("Activated user %s", user.id)
    return user
