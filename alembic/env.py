"""Alembic environment for the accounts database.

Revisions are hand-written SQL (no ORM metadata, no autogenerate). The
connection URL always comes from config.settings so migrations hit the
same database as the service.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from config.settings import settings

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _configure(**kwargs: object) -> None:
    context.configure(target_metadata=None, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


def _run_with_connection(connection: Connection) -> None:
    _configure(connection=connection)


async def _run_online() -> None:
    engine = create_async_engine(settings.DATABASE_URL)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_with_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    # Emit SQL to stdout instead of executing it.
    _configure(
        url=settings.DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_run_online())
