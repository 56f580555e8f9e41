"""Shared test fixtures."""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("CONFIG_API_KEY", "test-api-key")
os.environ.setdefault("ENVIRONMENT", "development")

from homescreen.core.dependencies import get_config_store  # noqa: E402
from homescreen.main import app  # noqa: E402
from homescreen.services.config_store import ConfigStore  # noqa: E402


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "configs"


@pytest.fixture
def store(data_dir: Path) -> ConfigStore:
    """A store rooted in a fresh temporary directory."""
    return ConfigStore(data_dir)


@pytest.fixture
async def client(store: ConfigStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client for the FastAPI app, wired to the temporary store."""
    app.dependency_overrides[get_config_store] = lambda: store
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_config_store, None)
