"""
Pytest configuration and shared fixtures for cross-package tests
"""

import json

import pytest

from control_panel.config import Settings

TEST_SECRET = "integration-secret"


@pytest.fixture(scope="session")
def test_env_vars():
    """Provide test environment variables."""
    return {
        "SECRET": TEST_SECRET,
        "DBG": "0",
        "STEAM_WEB_API_KEY": "",
        "DISCORD_BOT_TOKEN": "test-discord-token",
        "TELEGRAM_BOT_TOKEN": "",
        "SLACK_BOT_TOKEN": "",
        "SLACK_APP_TOKEN": "",
    }


@pytest.fixture
def mock_env(monkeypatch, test_env_vars, tmp_path):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("PUBLIC_PATH", str(tmp_path / "public"))
    monkeypatch.setenv("WATCHER_CONFIG_PATH", str(tmp_path / "config" / "default.config.json"))


@pytest.fixture
def env_settings(mock_env):
    """Settings loaded from the mocked environment."""
    return Settings(_env_file=None)


@pytest.fixture
def sample_server_config():
    """Provide a sample watcher configuration list."""
    return [
        {
            "server": {"type": "minecraft", "host": "mc.example.com", "port": 25565},
            "discord": [{"channelId": "123456789012345678"}],
        },
        {
            "server": {"type": "valheim", "host": "10.0.0.5", "port": 2457},
            "telegram": [{"chatId": "-100123456"}],
        },
    ]


@pytest.fixture
def seeded_config(env_settings, sample_server_config):
    """Write the sample configuration to the watcher config path."""
    path = env_settings.watcher_config_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(sample_server_config))
    return path
