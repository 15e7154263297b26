"""Browser infrastructure providers."""

import webbrowser

from dishka import Scope, provide

from invoicer.adapter.browser import HistoryNavigator, InMemoryStore, JsonFileStore
from invoicer.config import Settings
from invoicer.domain.repository import BrowserStorage
from invoicer.domain.service import Navigator
from invoicer.util.di.base import ProviderBase
from invoicer.util.error import ConfigurationError


class BrowserProvider(ProviderBase):
    """Browser component base (client-local storage and navigation)."""

    __mock_component__ = "browser"


class ProdBrowserProvider(BrowserProvider):
    """Production browser provider.

    Durable state goes to a JSON file; session-scoped state lives in memory
    for the life of the process. External redirects open the system browser.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_browser_storage(self, settings: Settings) -> BrowserStorage:
        """Provide client-local storage.

        Raises:
            ConfigurationError: If the storage path is a directory
        """
        path = settings.storage_path
        if path.is_dir():
            raise ConfigurationError(f"Storage path is a directory: {path}")
        return BrowserStorage(local=JsonFileStore(path), session=InMemoryStore())

    @provide(scope=Scope.APP)
    def get_history_navigator(self) -> HistoryNavigator:
        """Provide navigator opening external URLs in the system browser."""
        return HistoryNavigator(open_external=webbrowser.open)

    @provide(scope=Scope.APP)
    def get_navigator(self, history: HistoryNavigator) -> Navigator:
        return history
