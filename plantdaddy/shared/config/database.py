# 📄 File: plantdaddy/shared/config/database.py
#
# 🧭 Purpose (Layman Explanation):
# Describes how PlantDaddy talks to its database: which engine options to use
# and the common starting point every stored table is built from.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy declarative base with a constraint naming convention, plus
# engine keyword construction that adapts pooling to the configured driver.
#
# 🔗 Dependencies:
# - SQLAlchemy declarative base and MetaData
# - plantdaddy.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - plantdaddy.shared.infrastructure.database.connection
# - All ORM models under plantdaddy.modules.*.infrastructure.database
# - migrations/env.py (target metadata)

from typing import Any, Dict

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

from .settings import Settings


# =============================================================================
# ENGINE CONFIGURATION
# =============================================================================

def build_engine_kwargs(settings: Settings) -> Dict[str, Any]:
    """
    Build create_async_engine keyword arguments for the configured database.

    PostgreSQL (asyncpg) gets a sized pool and server settings; SQLite is
    used for local runs and tests and cannot take pool sizing arguments.
    """
    url = settings.database_url
    config: Dict[str, Any] = {
        "echo": settings.DEBUG and settings.is_development,
    }

    if url.startswith("sqlite"):
        config["connect_args"] = {"check_same_thread": False}
        return config

    config.update({
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "connect_args": {
            "server_settings": {
                "application_name": f"plantdaddy_{settings.ENVIRONMENT}",
                "timezone": "UTC",
                "jit": "off",
            },
            "command_timeout": 60,
        },
    })
    return config


# =============================================================================
# DATABASE MODELS BASE CLASS
# =============================================================================

# Naming convention for database constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Shares one MetaData (with the naming convention above) across every
    module so migrations see the whole schema.
    """
    metadata = metadata
