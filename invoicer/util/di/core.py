"""Core DI providers (non-mockable)."""

from dishka import Scope, from_context, provide

from invoicer.config import OAuthSettings, Settings, StorageSettings, UISettings
from invoicer.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are passed in as container context by whoever builds the
    container; the nested sections are derived from them.
    """

    settings = from_context(provides=Settings, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def provide_oauth_settings(self, settings: Settings) -> OAuthSettings:
        return settings.oauth

    @provide(scope=Scope.APP)
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        return settings.storage

    @provide(scope=Scope.APP)
    def provide_ui_settings(self, settings: Settings) -> UISettings:
        return settings.ui
