"""Domain layer DI providers."""

from dishka import Scope, provide

from invoicer.config import StorageSettings
from invoicer.domain.repository import BrowserStorage
from invoicer.domain.service import AuthSession, InviteCorrelation, Navigator
from invoicer.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are APP-scoped: the session identity and the invite
    correlation live as long as the client, across page loads.
    """

    scope = Scope.APP

    @provide
    def get_auth_session(
        self,
        storage: BrowserStorage,
        navigator: Navigator,
        storage_settings: StorageSettings,
    ) -> AuthSession:
        """Provide the session identity, restored once from durable storage."""
        auth_session = AuthSession(
            store=storage.local,
            navigator=navigator,
            access_token_key=storage_settings.access_token_key,
            user_key=storage_settings.user_key,
        )
        auth_session.restore()
        return auth_session

    @provide
    def get_invite_correlation(
        self, storage: BrowserStorage, storage_settings: StorageSettings
    ) -> InviteCorrelation:
        """Provide the invite correlation over session-scoped storage."""
        return InviteCorrelation(
            store=storage.session, key=storage_settings.invite_correlation_key
        )
