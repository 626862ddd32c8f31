"""
Shared test setup.

Settings are read when ``event_admin.config`` is imported, so the environment
is seeded here before any test module imports the package.
"""

import os
import tempfile
from pathlib import Path

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="event_admin_tests_"))

os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_ROOT / 'settings.db'}")
os.environ.setdefault("MASTER_TOKEN", "test_master_token")
os.environ.setdefault(
    "JWT__SECRET_KEY", "test-secret-key-0123456789abcdef0123456789abcdef"
)
os.environ.setdefault("LOGS_DIR", str(_TEST_ROOT / "logs"))
os.environ.setdefault("EVENT_ADMIN_CONFIG", str(_TEST_ROOT / "missing.toml"))
os.environ.setdefault("EVENT_ADMIN_ENV", str(_TEST_ROOT / "missing.env"))

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from event_admin.db.database import get_db, get_session_factory  # noqa: E402
from event_admin.main import api_app, app  # noqa: E402
from event_admin.models import Base  # noqa: E402


@pytest.fixture
async def session_factory():
    """Isolated SQLite database, yields an async session factory."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()
    Path(db_path).unlink(missing_ok=True)


@pytest.fixture
async def client(session_factory):
    """HTTP client for the mounted app, bound to the isolated database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    api_app.dependency_overrides[get_session_factory] = lambda: session_factory
    api_app.dependency_overrides[get_db] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    api_app.dependency_overrides.clear()
