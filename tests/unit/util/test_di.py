"""Unit tests for container wiring."""

import pytest

from invoicer.adapter.backend import BackendClient, HttpBackendClient, MockBackendClient
from invoicer.adapter.browser import JsonFileStore
from invoicer.config import OAuthSettings, Settings, UISettings
from invoicer.domain.repository import BrowserStorage
from invoicer.interface.app import create_app
from invoicer.util.di import BackendProvider, get_provider
from invoicer.util.di.base import ProviderBase
from invoicer.util.di.container import create_container
from invoicer.util.error import ConfigurationError, DependencyInjectionError
from tests.di import MockBackendProvider, build_test_container


class StandaloneProvider(ProviderBase):
    """Mockable base with no mock implementation."""

    __mock_component__ = "standalone"


class ProdStandaloneProvider(StandaloneProvider):
    __is_mock__ = False


class TestGetProvider:
    """Tests for get_provider."""

    def test_picks_mock_when_asked(self):
        assert get_provider(BackendProvider, use_mock=True) is MockBackendProvider

    def test_missing_mock_raises(self):
        with pytest.raises(DependencyInjectionError, match="No mock implementation"):
            get_provider(StandaloneProvider, use_mock=True)


class TestTestContainer:
    """Tests for build_test_container."""

    def test_unknown_component(self):
        with pytest.raises(DependencyInjectionError, match="Unknown components"):
            build_test_container(unmock={"database"})

    @pytest.mark.asyncio
    async def test_mocked_backend_is_shared(self):
        container = build_test_container()
        try:
            assert await container.get(BackendClient) is await container.get(
                MockBackendClient
            )
        finally:
            await container.close()


class TestProductionContainer:
    """Tests for the production container."""

    @pytest.mark.asyncio
    async def test_file_backed_storage_and_http_backend(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STORAGE__PATH", str(tmp_path / "storage.json"))
        container = create_container()
        try:
            storage = await container.get(BrowserStorage)
            backend = await container.get(BackendClient)

            assert isinstance(storage.local, JsonFileStore)
            assert isinstance(backend, HttpBackendClient)
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_directory_storage_path_is_rejected(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STORAGE__PATH", str(tmp_path))
        container = create_container()
        try:
            with pytest.raises(ConfigurationError, match="is a directory"):
                await container.get(BrowserStorage)
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_explicit_settings_reach_the_container(self, tmp_path):
        settings = Settings(
            oauth={"provider": "outlook"},
            storage={"path": str(tmp_path / "storage.json")},
            ui={"invite_redirect_delay": 7},
        )
        container = create_container(settings)
        try:
            assert await container.get(Settings) is settings
            assert (await container.get(OAuthSettings)).provider == "outlook"
            assert (await container.get(UISettings)).invite_redirect_delay == 7
        finally:
            await container.close()


class TestCreateApp:
    """Tests for create_app."""

    @pytest.mark.asyncio
    async def test_app_container_uses_given_settings(self, tmp_path):
        app = create_app(
            Settings(
                api_host="api.example.com",
                environment="production",
                storage={"path": str(tmp_path / "storage.json")},
            )
        )
        try:
            settings = await app.container.get(Settings)

            assert settings.api.base_url == "https://api.example.com"
        finally:
            await app.close()

    @pytest.mark.asyncio
    async def test_test_container_accepts_settings(self):
        container = build_test_container(settings=Settings(oauth={"provider": "outlook"}))
        try:
            assert (await container.get(OAuthSettings)).provider == "outlook"
        finally:
            await container.close()
