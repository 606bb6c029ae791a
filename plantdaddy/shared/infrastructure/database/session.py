# 📄 File: plantdaddy/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Manages database sessions (like conversations with the database) ensuring each request
# gets its own clean session and that half-finished changes are never saved.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session management with dependency injection for FastAPI,
# commit-on-success / rollback-on-error transactions, and a standalone session
# factory for Celery workers that run their own event loop.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - fastapi exceptions (expected request failures are not logged as errors)
# - plantdaddy/shared/infrastructure/database/connection.py (database engine)
#
# 🔄 Connected Modules / Calls From:
# - Presentation dependencies in every module (repository construction)
# - plantdaddy/modules/notifications/tasks.py (background sweep)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from plantdaddy.shared.config.database import build_engine_kwargs
from plantdaddy.shared.config.settings import get_settings
from plantdaddy.shared.core.exceptions import DatabaseError, PlantDaddyException
from plantdaddy.shared.infrastructure.database.connection import get_database_engine

logger = logging.getLogger(__name__)


def make_session_factory(engine) -> async_sessionmaker:
    """Session factory with the options every PlantDaddy session uses."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Keep objects accessible after commit
        autoflush=True,
    )


class DatabaseSessionManager:
    """
    Manages database sessions with transaction handling and automatic cleanup.
    """

    def __init__(self):
        self._session_factory: Optional[async_sessionmaker] = None

    def initialize(self) -> None:
        """Initialize the session factory with the database engine."""
        self._session_factory = make_session_factory(get_database_engine())
        logger.info("Database session factory initialized successfully")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with automatic transaction management.

        Application exceptions propagate unchanged after rollback so the
        API can still answer with their own status code.

        Yields:
            AsyncSession: Database session

        Raises:
            DatabaseError: If the session manager is not ready or SQL fails
        """
        if self._session_factory is None:
            raise DatabaseError("Session manager not initialized")

        async with session_scope(self._session_factory) as session:
            yield session

    def is_initialized(self) -> bool:
        """Check if session manager is initialized."""
        return self._session_factory is not None


@asynccontextmanager
async def session_scope(factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Open a session from ``factory``, commit on success and roll back on error."""
    session: AsyncSession = factory()

    try:
        logger.debug("Database session created")
        yield session

        await session.commit()
        logger.debug("Database transaction committed successfully")

    except (PlantDaddyException, RequestValidationError, HTTPException):
        # Expected request failures; the exception handlers report them
        await session.rollback()
        raise

    except exc.SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Database error occurred, transaction rolled back: {e}")
        raise DatabaseError(f"Database operation failed: {e}")

    except Exception:
        await session.rollback()
        logger.exception("Unexpected error occurred, transaction rolled back")
        raise

    finally:
        await session.close()
        logger.debug("Database session closed")


# Global session manager instance
session_manager = DatabaseSessionManager()


def initialize_sessions() -> None:
    """Initialize the global database session manager."""
    session_manager.initialize()


# FastAPI dependency for getting database sessions
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides database sessions.

    Usage:
        @router.post("/plants")
        async def create_plant(
            payload: PlantCreateRequest,
            db: AsyncSession = Depends(get_db_session)
        ):
            ...

    Yields:
        AsyncSession: Database session
    """
    async with session_manager.get_session() as session:
        yield session


@asynccontextmanager
async def standalone_session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """
    Create a private engine and session factory for the lifetime of the block.

    Celery tasks run each job in a fresh event loop, so they cannot share the
    API process engine.
    """
    settings = get_settings()
    engine = create_async_engine(settings.database_url, **build_engine_kwargs(settings))
    try:
        yield make_session_factory(engine)
    finally:
        await engine.dispose()
