"""Pytest configuration and fixtures for asset-audit.

Environment is pinned before app.main is imported: a throwaway SQLite file,
a known admin password and a fake Snipe-IT URL. HTTP tests run the app
through ASGITransport with the Snipe-IT client replaced by an AsyncMock,
so nothing leaves the process.
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

TEST_ADMIN_PASSWORD = "test-admin-secret"
TEST_API_TOKEN = "test-snipeit-token"

_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="asset-audit-tests-"))
os.environ["ADMIN_PASSWORD"] = TEST_ADMIN_PASSWORD
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'audits.db'}"
os.environ["SNIPEIT_URL"] = "http://snipeit.test"
os.environ["TELEMETRY_ENABLED"] = "false"

from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.api.v1.dependencies import get_asset_directory  # noqa: E402
from app.application.dtos.asset import RemoteCallResult  # noqa: E402
from app.core.config import get_settings  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.persistence import database  # noqa: E402
from app.infrastructure.persistence.database import (  # noqa: E402
    Base,
    build_engine,
    build_sessionmaker,
    create_schema,
)

get_settings.cache_clear()

from app.main import app  # noqa: E402


async def _reset_schema() -> None:
    """Drop and recreate tables on the process engine (fresh DB per test)."""
    from app.infrastructure.persistence import models  # noqa: F401

    engine = database.get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await create_schema(engine)


@pytest.fixture
def fake_directory() -> AsyncMock:
    """Stand-in for SnipeITClient; audit posts succeed unless a test says otherwise."""
    directory = AsyncMock()
    directory.post_audit.return_value = RemoteCallResult(success=True, payload={"status": "success"})
    directory.update_asset_location.return_value = {"status": "success"}
    directory.fetch_all_assets.return_value = []
    directory.list_top_level_locations.return_value = []
    return directory


@pytest.fixture
async def client(fake_directory: AsyncMock) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with a fresh database."""
    await _reset_schema()
    limiter.reset()
    app.state.asset_cache = None
    app.dependency_overrides[get_asset_directory] = lambda: fake_directory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    await database.dispose_engine()


@pytest.fixture
def admin_password() -> str:
    return TEST_ADMIN_PASSWORD


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Password": TEST_ADMIN_PASSWORD, "X-API-Token": TEST_API_TOKEN}


@pytest.fixture
def token_headers() -> dict[str, str]:
    return {"X-API-Token": TEST_API_TOKEN}


@pytest.fixture
async def db_session(tmp_path: Path) -> AsyncSession:
    """Session on a private SQLite file for repository tests."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'repo.db'}")
    await create_schema(engine)
    session_factory = build_sessionmaker(engine)
    async with session_factory() as session:
        yield session
    await engine.dispose()
