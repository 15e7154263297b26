"""Application layer DI providers."""

from dishka import Scope, provide

from invoicer.adapter.backend import BackendClient
from invoicer.application.usecase.auth import LoginUseCase, LogoutUseCase
from invoicer.application.usecase.invite import (
    AcceptInviteUseCase,
    CreateInviteUseCase,
    GetInvitesUseCase,
    GetInviteUseCase,
    RevokeInviteUseCase,
    ValidateInviteUseCase,
)
from invoicer.application.usecase.oauth import (
    CompleteOAuthCallbackUseCase,
    StartEmailConnectionUseCase,
)
from invoicer.config import OAuthSettings, UISettings
from invoicer.domain.service import AuthSession, InviteCorrelation, Navigator
from invoicer.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed.

    Use cases are REQUEST-scoped: one request scope per page load.
    """

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_validate_invite_use_case(
        self, backend: BackendClient
    ) -> ValidateInviteUseCase:
        """Provide validate invite use case."""
        return ValidateInviteUseCase(backend=backend)

    @provide(scope=Scope.REQUEST)
    def get_accept_invite_use_case(self, backend: BackendClient) -> AcceptInviteUseCase:
        """Provide accept invite use case."""
        return AcceptInviteUseCase(backend=backend)

    @provide(scope=Scope.REQUEST)
    def get_create_invite_use_case(
        self, backend: BackendClient, ui_settings: UISettings
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(backend=backend, ui_settings=ui_settings)

    @provide(scope=Scope.REQUEST)
    def get_get_invites_use_case(self, backend: BackendClient) -> GetInvitesUseCase:
        """Provide get invites use case."""
        return GetInvitesUseCase(backend=backend)

    @provide(scope=Scope.REQUEST)
    def get_get_invite_use_case(self, backend: BackendClient) -> GetInviteUseCase:
        """Provide get invite use case."""
        return GetInviteUseCase(backend=backend)

    @provide(scope=Scope.REQUEST)
    def get_revoke_invite_use_case(self, backend: BackendClient) -> RevokeInviteUseCase:
        """Provide revoke invite use case."""
        return RevokeInviteUseCase(backend=backend)

    # OAuth use cases
    @provide(scope=Scope.REQUEST)
    def get_start_email_connection_use_case(
        self,
        backend: BackendClient,
        correlation: InviteCorrelation,
        navigator: Navigator,
        oauth_settings: OAuthSettings,
    ) -> StartEmailConnectionUseCase:
        """Provide start email connection use case."""
        return StartEmailConnectionUseCase(
            backend=backend,
            correlation=correlation,
            navigator=navigator,
            oauth_settings=oauth_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_complete_oauth_callback_use_case(
        self,
        backend: BackendClient,
        auth_session: AuthSession,
        correlation: InviteCorrelation,
        oauth_settings: OAuthSettings,
    ) -> CompleteOAuthCallbackUseCase:
        """Provide complete OAuth callback use case."""
        return CompleteOAuthCallbackUseCase(
            backend=backend,
            auth_session=auth_session,
            correlation=correlation,
            oauth_settings=oauth_settings,
        )

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self, backend: BackendClient, navigator: Navigator
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(backend=backend, navigator=navigator)

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(
        self, auth_session: AuthSession, navigator: Navigator
    ) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(auth_session=auth_session, navigator=navigator)
