"""Root conftest.py -- shared fixtures for all test modules."""
import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set env vars BEFORE any app imports; the settings refuse to load without them
os.environ.setdefault("DATABASE_URL", "postgresql+asyncpg://service_role@localhost:5432/test_db")
os.environ.setdefault("DATABASE_SERVICE_KEY", "test-service-role-key")

from ridepilot.core.config import get_settings, Settings
from tests.fakes import InMemoryDriverStore, make_driver


# =========================================================================
# Settings
# =========================================================================
@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Clear LRU cache before each test to prevent stale settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    return get_settings()


# =========================================================================
# Drivers & store
# =========================================================================
@pytest.fixture
def driver_without_pin():
    """Driver D100 with no PIN stored (default PIN applies)."""
    return make_driver(license="D100", name="Dana Driver", pin=None, auth_token="link-token-d100")


@pytest.fixture
def driver_with_pin():
    return make_driver(license="D200", name="Sam Driver", pin="9876", auth_token="link-token-d200")


@pytest.fixture
def inactive_driver():
    return make_driver(license="D300", name="Former Driver", auth_token="link-token-d300", is_active=False)


@pytest.fixture
def store(driver_without_pin, driver_with_pin, inactive_driver) -> InMemoryDriverStore:
    return InMemoryDriverStore(drivers=[driver_without_pin, driver_with_pin, inactive_driver])


# =========================================================================
# Mock DB Session
# =========================================================================
@pytest.fixture
def mock_session() -> AsyncMock:
    """Mock async database session (no real DB needed)."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.scalar = AsyncMock(return_value=None)
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


# =========================================================================
# FastAPI Test Client
# =========================================================================
@pytest.fixture
def app():
    from ridepilot.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
async def client(app, store):
    """httpx.AsyncClient against the app with the in-memory store."""
    from httpx import AsyncClient, ASGITransport
    from ridepilot.core.dependencies import get_driver_store

    async def override_store():
        return store

    app.dependency_overrides[get_driver_store] = override_store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
