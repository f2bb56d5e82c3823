"""Test fixtures for the movie catalog backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from catalog.core.config import get_settings
from catalog.core.security import get_password_hash
from catalog.db.base import Base
from catalog.db.session import dispose_engine, get_sessionmaker
from catalog.main import app
from catalog.models import User
from catalog.services import auth_service


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(
    reset_database: AsyncIterator[None], db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client plus an activated and an inactive account.

    ``headers`` authenticates as the activated editor; ``inactive_headers``
    authenticates as an account that never completed activation.
    """
    sessionmaker = get_sessionmaker(db_url)
    editor_password = "pa55word-editor"
    inactive_password = "pa55word-inactive"

    async with sessionmaker() as session:
        editor = User(
            name="Alice Editor",
            email="alice@example.com",
            password_hash=get_password_hash(editor_password),
            activated=True,
        )
        inactive = User(
            name="Bob Pending",
            email="bob@example.com",
            password_hash=get_password_hash(inactive_password),
            activated=False,
        )
        session.add_all([editor, inactive])
        await session.commit()

        editor_token = await auth_service.authenticate(
            session, email=editor.email, password=editor_password
        )
        inactive_token = await auth_service.authenticate(
            session, email=inactive.email, password=inactive_password
        )

        context: dict[str, object] = {
            "editor_id": editor.id,
            "editor_email": editor.email,
            "editor_password": editor_password,
            "inactive_id": inactive.id,
            "headers": {"Authorization": f"Bearer {editor_token.plaintext}"},
            "inactive_headers": {
                "Authorization": f"Bearer {inactive_token.plaintext}"
            },
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
