"""Unit tests for Settings."""

from pathlib import Path

from invoicer.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_test_environment_uses_http_with_port(self):
        settings = Settings(environment="test", api_host="localhost", api_port=8000)

        assert settings.api.base_url == "http://localhost:8000"

    def test_production_uses_https_without_port(self):
        settings = Settings(environment="production", api_host="api.invoicer.app")

        assert settings.api.base_url == "https://api.invoicer.app"

    def test_timeout_is_carried_into_api_settings(self):
        assert Settings(api_timeout=5).api.timeout == 5

    def test_nested_env_vars(self, monkeypatch):
        monkeypatch.setenv("OAUTH__PROVIDER", "outlook")
        monkeypatch.setenv("UI__INVITE_EXPIRY_HOURS", "48")

        settings = Settings()

        assert settings.oauth.provider == "outlook"
        assert settings.ui.invite_expiry_hours == 48

    def test_storage_path_expands_home(self):
        settings = Settings(storage={"path": "~/store.json"})

        assert settings.storage_path == Path.home() / "store.json"
