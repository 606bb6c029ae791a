# 📄 File: migrations/env.py
# 🧭 Purpose (Layman Explanation):
# Tells Alembic how to connect to the database and which tables PlantDaddy owns, so
# schema changes can be applied safely in every environment.
# 🧪 Purpose (Technical Summary):
# Alembic environment for async migrations. Reads the database URL from the
# pydantic-settings Settings (DATABASE_URL or DB_* parts) and targets the shared
# declarative metadata with every module's models imported.
# 🔗 Dependencies:
# - alembic (migration tool)
# - SQLAlchemy async engine (asyncpg / aiosqlite)
# - python-dotenv (environment variables)
# - plantdaddy.shared.config
# 🔄 Connected Modules / Calls From:
# - alembic CLI commands (upgrade, downgrade, revision)

import asyncio
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

# Load environment variables before settings are read
load_dotenv()

from plantdaddy.shared.config.database import Base  # noqa: E402
from plantdaddy.shared.config.settings import get_settings  # noqa: E402

# Import all module models so they are registered on the metadata
from plantdaddy.modules.user_management.infrastructure.database import models as user_models  # noqa: E402,F401
from plantdaddy.modules.households.infrastructure.database import models as household_models  # noqa: E402,F401
from plantdaddy.modules.plant_care.infrastructure.database import models as plant_models  # noqa: E402,F401
from plantdaddy.modules.notifications.infrastructure.database import models as notification_models  # noqa: E402,F401

# This is the Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Set the target metadata for 'autogenerate' support
target_metadata = Base.metadata


def get_database_url() -> str:
    return get_settings().database_url


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Emits SQL to the script output without a database connection.
    """
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite needs batch mode for ALTER TABLE
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations over an async engine."""
    connectable = create_async_engine(get_database_url(), poolclass=pool.NullPool)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
