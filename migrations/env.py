"""
Alembic environment configuration.

Runs whenever Alembic performs a migration. It connects with the
application's DATABASE_URL and knows the accounts and transactions
tables through Base.metadata.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from account_ledger.config import get_settings
from account_ledger.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Importing account_ledger.models registers every table on Base.metadata,
# which autogenerate compares against the live schema
target_metadata = Base.metadata

# The URL comes from the environment, never from alembic.ini
config.set_main_option(
    "sqlalchemy.url",
    get_settings().DATABASE_URL.replace("%", "%%"),
)


def run_migrations_offline() -> None:
    """Emit the migration as a SQL script without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect to the database and apply the migration directly."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
