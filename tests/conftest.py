"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.ex_common.database import get_db_session
from src.main import app


@pytest.fixture
def db_session() -> MagicMock:
    """Stand-in AsyncSession injected through the get_db_session dependency."""
    session = MagicMock()
    session.commit = AsyncMock()
    return session


@pytest.fixture
async def client(db_session: MagicMock) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""

    async def _override():
        yield db_session

    app.dependency_overrides[get_db_session] = _override
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
