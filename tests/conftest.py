"""
Shared pytest fixtures for PlantDaddy tests.

Every test gets its own in-memory SQLite database. API tests drive the real
FastAPI application through httpx with the database session and notification
channels swapped for test doubles.
"""

import os

# Configuration is read once at import time, so it must be in place first
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from plantdaddy.main import create_application  # noqa: E402
from plantdaddy.modules.households.infrastructure.database import models as household_models  # noqa: E402,F401
from plantdaddy.modules.notifications.infrastructure.database import models as notification_models  # noqa: E402,F401
from plantdaddy.modules.notifications.presentation.dependencies import get_notification_channels  # noqa: E402
from plantdaddy.modules.plant_care.infrastructure.database import models as plant_models  # noqa: E402,F401
from plantdaddy.modules.user_management.infrastructure.database import models as user_models  # noqa: E402,F401
from plantdaddy.shared.config.database import Base  # noqa: E402
from plantdaddy.shared.infrastructure.database import get_db_session  # noqa: E402
from plantdaddy.shared.infrastructure.database.session import make_session_factory, session_scope  # noqa: E402
from tests.helpers import FakeChannel, register  # noqa: E402


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_scope(session_factory) as session:
        yield session


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def app(session_factory, channel):
    application = create_application()

    async def override_db_session():
        async with session_scope(session_factory) as session:
            yield session

    application.dependency_overrides[get_db_session] = override_db_session
    application.dependency_overrides[get_notification_channels] = lambda: [channel]
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def alice(client) -> dict:
    return await register(client, "alice")


@pytest.fixture
async def bob(client) -> dict:
    return await register(client, "bob")
