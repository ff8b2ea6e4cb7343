"""Tests for the features route."""

import pytest
from fastapi import status

from control_panel import __version__
from control_panel.routes.features import integration_services

INTEGRATION_VARS = [
    "STEAM_WEB_API_KEY",
    "DISCORD_BOT_TOKEN",
    "TELEGRAM_BOT_TOKEN",
    "SLACK_BOT_TOKEN",
    "SLACK_APP_TOKEN",
]


def clear_integrations(monkeypatch):
    for name in INTEGRATION_VARS:
        monkeypatch.delenv(name, raising=False)


def test_features(client, auth_headers, monkeypatch):
    """Test versions and services are reported."""
    clear_integrations(monkeypatch)
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "discord-token")

    response = client.get("/features", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["cache-control"] == "max-age=0"
    assert response.json() == {
        "versions": {"gsw": __version__, "gamedig": "5.0.0"},
        "services": {"steam": False, "discord": True, "telegram": False, "slack": False},
    }


def test_features_reads_environment_per_request(client, auth_headers, monkeypatch):
    """Test integration presence is re-read on each request."""
    clear_integrations(monkeypatch)
    assert client.get("/features", headers=auth_headers).json()["services"]["steam"] is False

    monkeypatch.setenv("STEAM_WEB_API_KEY", "key")

    assert client.get("/features", headers=auth_headers).json()["services"]["steam"] is True


def test_features_never_leaks_secret_values(client, auth_headers, monkeypatch):
    """Test that only presence flags are returned."""
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "super-secret-telegram")

    response = client.get("/features", headers=auth_headers)

    assert "super-secret-telegram" not in response.text


def test_features_debug_marker(make_client, settings_factory, auth_headers):
    """Test debug: true is added in debug mode."""
    client = make_client(settings_factory(dbg=True))

    assert client.get("/features", headers=auth_headers).json()["debug"] is True


def test_features_any_method(client, auth_headers):
    """Test features answers regardless of method."""
    assert client.post("/features", headers=auth_headers).status_code == status.HTTP_200_OK


def test_features_nonstandard_method(client, auth_headers):
    """Test a non-standard method is answered rather than refused with 405."""
    response = client.request("TRACE", "/features", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert "versions" in response.json()


@pytest.mark.parametrize("path", ["/features/", "/features/x", "/features/x/y"])
def test_features_below_path(client, auth_headers, path):
    """Test paths below /features are answered as features."""
    response = client.get(path, headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["versions"] == {"gsw": __version__, "gamedig": "5.0.0"}


def test_features_failure_is_json(client, auth_headers, monkeypatch):
    """Test a failure while collecting features is a 500 envelope."""

    def broken(environ=None):
        raise RuntimeError("environment unavailable")

    monkeypatch.setattr("control_panel.routes.features.integration_services", broken)

    response = client.get("/features", headers=auth_headers)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "environment unavailable"}


def test_features_requires_token(client):
    """Test a missing token is a bad request."""
    response = client.get("/features")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "text/html" in response.headers["content-type"]


def test_features_invalid_token(client):
    """Test an invalid token is unauthorized."""
    response = client.get("/features", headers={"x-btoken": "x" * 200})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Unauthorized"}


class TestIntegrationServices:
    """Tests for integration presence checks."""

    def test_none_configured(self):
        assert integration_services({}) == {
            "steam": False,
            "discord": False,
            "telegram": False,
            "slack": False,
        }

    def test_empty_values_count_as_missing(self):
        assert integration_services({"STEAM_WEB_API_KEY": ""})["steam"] is False

    def test_slack_needs_both_tokens(self):
        assert integration_services({"SLACK_BOT_TOKEN": "b"})["slack"] is False
        assert integration_services({"SLACK_APP_TOKEN": "a"})["slack"] is False
        assert integration_services({"SLACK_BOT_TOKEN": "b", "SLACK_APP_TOKEN": "a"})["slack"] is True
