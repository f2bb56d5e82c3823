"""Alembic entry point for the catalog schema.

Migrations always run on a synchronous driver; the async URLs the application
uses are mapped to their blocking counterparts first.
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import URL, make_url

from catalog.core.config import get_settings
from catalog.db.base import Base
from catalog.models import *  # noqa: F401,F403

_SYNC_DRIVERS = {
    "sqlite+aiosqlite": "sqlite",
    "postgresql": "postgresql+psycopg",
    "postgresql+asyncpg": "postgresql+psycopg",
}

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def migration_url() -> URL:
    """Return the database URL for migrations, preferring ``SYNC_DATABASE_URL``."""
    settings = get_settings()
    url = make_url(settings.sync_database_url or settings.database_url)
    return url.set(drivername=_SYNC_DRIVERS.get(url.drivername, url.drivername))


def run_migrations_offline(url: URL) -> None:
    """Emit SQL to stdout instead of connecting."""
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: URL) -> None:
    """Apply migrations over a single unpooled connection."""
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = url.render_as_string(hide_password=False)
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        # SQLite cannot ALTER most constraints in place
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline(migration_url())
else:
    run_migrations_online(migration_url())
