"""Alembic environment configuration."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from ctr_engine.adapters.persistence.models import counters_table, metadata
from ctr_engine.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Register the configured table so autogenerate can see it
if settings.counters_table:
    counters_table(settings.counters_table)

target_metadata = metadata

# Alembic runs synchronously; swap the async driver for a sync one.
SYNC_URL = (
    settings.database_url
    .replace("+asyncpg", "+psycopg2")
    .replace("+aiosqlite", "")
)
config.set_main_option("sqlalchemy.url", SYNC_URL)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (generate SQL without connecting)."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section, {})

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
