"""Shared fixtures for control panel tests."""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from control_panel.config import Settings
from control_panel.main import create_app
from game_catalog.catalog import GameCatalog
from security.auth import encode_token

SECRET = "test-secret"
NOW = 1_700_000_000_000


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "secret": SECRET,
        "dbg": False,
        "public_path": tmp_path / "public",
        "watcher_config_path": tmp_path / "config" / "servers.json",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory(tmp_path):
    """Factory for settings with overrides on top of the test defaults."""

    def _make(**overrides):
        return make_settings(tmp_path, **overrides)

    return _make


@pytest.fixture
def settings(settings_factory):
    """Settings with a known secret and temporary paths."""
    return settings_factory()


@pytest.fixture
def mock_watcher():
    """Watcher double recording every control call."""
    watcher = Mock()
    watcher.start = AsyncMock()
    watcher.stop = AsyncMock()
    watcher.restart = AsyncMock()
    watcher.read_config = AsyncMock(return_value=[{"type": "minecraft", "host": "mc.local"}])
    watcher.update_config = AsyncMock()
    return watcher


@pytest.fixture
def catalog():
    """Small game catalog."""
    return GameCatalog.from_dict(
        {
            "version": "5.0.0",
            "games": {"valheim": {"name": "Valheim", "release_year": 2021}},
            "protocols": ["valve"],
        }
    )


@pytest.fixture
def make_client(mock_watcher, catalog):
    """Factory for test clients with custom settings."""
    clients = []

    def _make(settings):
        app = create_app(settings, watcher=mock_watcher, catalog=catalog, clock=lambda: NOW)
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, settings):
    """Test client for the default settings."""
    return make_client(settings)


@pytest.fixture
def token():
    """Token valid for one minute after NOW."""
    return encode_token("s" * 32, NOW + 60_000, SECRET)


@pytest.fixture
def auth_headers(token):
    """Headers carrying a valid bearer token."""
    return {"x-btoken": token}


@pytest.fixture
def expired_token():
    """Token whose expiry equals NOW."""
    return encode_token("s" * 32, NOW, SECRET)
