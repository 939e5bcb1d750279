"""
Pytest configuration and fixtures.
"""

import json
import shutil
from pathlib import Path
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

from backend.app.main import app
from backend.app.api.deps import get_rng
from backend.app.core.config import DEFAULT_DATA_PATH, Settings, get_settings
from backend.app.services.base_data_store import load_base_snapshot
from backend.app.services.live_simulator import make_rng

TEST_SEED = 20240115


@pytest.fixture
def base_snapshot():
    """The packaged base fixture, validated."""
    return load_base_snapshot(DEFAULT_DATA_PATH)


@pytest.fixture
def rng():
    return make_rng(TEST_SEED)


@pytest.fixture
def fixture_copy(tmp_path: Path) -> Path:
    """Writable copy of the packaged fixture."""
    target = tmp_path / "network_data.json"
    shutil.copyfile(DEFAULT_DATA_PATH, target)
    return target


@pytest.fixture
def write_fixture(tmp_path: Path):
    """Write arbitrary text (or a JSON-able object) as a fixture file."""
    def _write(content, name: str = "fixture.json") -> Path:
        path = tmp_path / name
        if not isinstance(content, str):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def test_settings() -> Settings:
    return Settings(data_path=DEFAULT_DATA_PATH, simulation_seed=TEST_SEED)


@pytest.fixture(scope="function")
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client with settings and random source overridden.
    Tests may mutate `test_settings` (e.g. data_path) before issuing requests.
    """
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_rng] = lambda: make_rng(test_settings.simulation_seed)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
