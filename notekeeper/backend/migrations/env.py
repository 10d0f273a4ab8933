"""
Alembic environment for the notes schema.

The target database is DATABASE_URL when set (any postgres:// form is
switched to asyncpg), otherwise the URL built from database.yaml and
DB_PASSWORD. Online migrations run over an async engine.
"""

import asyncio
import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from notekeeper.backend.models.base import Base
from notekeeper.backend.models.note import Note  # noqa: F401  registers the table

ASYNC_SCHEME = "postgresql+asyncpg://"

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def resolve_database_url() -> str:
    url = os.environ.get("DATABASE_URL")
    if not url:
        from notekeeper.backend.core.config import get_database_url

        return get_database_url()

    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return ASYNC_SCHEME + url[len(prefix):]
    return url


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL instead of executing it (``alembic upgrade head --sql``)."""
    _configure(
        url=resolve_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync_migrations(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = resolve_database_url()

    engine = async_engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
