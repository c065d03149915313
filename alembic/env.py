from __future__ import annotations

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import Connection

from alembic import context

config = context.config

# apps.migrations.main configures logging itself and injects its locked connection.
if config.config_file_name is not None and config.attributes.get("connection") is None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _migrate_with(connection: Connection) -> None:
    # Revisions issue raw DDL through `op.execute`; no ORM metadata is attached.
    context.configure(connection=connection, target_metadata=None)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """
    Render verification schema DDL as SQL script without connecting.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        `sqlalchemy.url` is set in `alembic.ini` or via `-x`/config override.
    Raises:
        Exception: Alembic configuration errors.
    Side Effects:
        Writes SQL to Alembic output buffer.
    """
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=None,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Apply verification schema revisions on a live Postgres connection.

    Related:
      - apps/migrations/main.py
      - alembic/versions/20261017_0001_verification_profiles_v1.py

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Runner-injected connection already holds the migration advisory lock.
    Raises:
        Exception: Database or Alembic failures.
    Side Effects:
        Creates or alters `users`, `leaderboard` and `ngos` tables.
    """
    injected = config.attributes.get("connection")
    if isinstance(injected, Connection):
        _migrate_with(injected)
        return

    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        _migrate_with(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
