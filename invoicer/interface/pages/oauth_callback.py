"""OAuth callback page.

Serves ``/auth/callback`` (main login and, through ``state``, both mailbox
flows), ``/email-accounts/callback`` and ``/email-accounts/callback-public``.
"""

import asyncio

import logfire

from invoicer.application.usecase.oauth import (
    CompleteOAuthCallbackRequest,
    CompleteOAuthCallbackResponse,
    CompleteOAuthCallbackUseCase,
)
from invoicer.config import UISettings
from invoicer.domain.error import DomainError
from invoicer.domain.service import AuthSession, Navigator
from invoicer.domain.value import CallbackState, OAuthFlow, Route
from invoicer.interface.pages.base import Page


class OAuthCallbackPage(Page):
    """Exchanges the authorization code the provider sent back.

    ``processing -> success | error``, both terminal for the page load.
    The exchange is sent at most once per page instance, even if the page
    is mounted again while the first exchange is still running.
    """

    headlines = {
        CallbackState.PROCESSING.value: "Connecting Your Email Account",
        CallbackState.SUCCESS.value: "Email Account Connected!",
        CallbackState.ERROR.value: "Connection Failed",
    }

    def __init__(
        self,
        query: dict[str, str],
        complete_callback: CompleteOAuthCallbackUseCase,
        auth_session: AuthSession,
        navigator: Navigator,
        ui_settings: UISettings,
        pinned_flow: OAuthFlow | None = None,
        mailbox_page: bool = False,
    ) -> None:
        """Initialize callback page.

        Args:
            query: Query parameters of the callback URL
            complete_callback: Exchange use case
            auth_session: Decides the flow on the mailbox page
            navigator: Navigator
            ui_settings: Display delays
            pinned_flow: Flow fixed by the route, ignoring ``state``
            mailbox_page: Route is a mailbox callback; without ``state`` the
                flow follows the session instead of defaulting to login
        """
        super().__init__()
        self.query = query
        self.complete_callback = complete_callback
        self.auth_session = auth_session
        self.navigator = navigator
        self.ui_settings = ui_settings
        self.pinned_flow = pinned_flow
        self.mailbox_page = mailbox_page

        self.state = CallbackState.PROCESSING
        self.flow: OAuthFlow | None = None
        self.message: str | None = None
        self.outcome: CompleteOAuthCallbackResponse | None = None
        self._processed = False

    @property
    def headline(self) -> str | None:
        if self.flow == OAuthFlow.MAIN_LOGIN:
            return {
                CallbackState.PROCESSING: "Signing You In",
                CallbackState.SUCCESS: "Login Successful!",
                CallbackState.ERROR: "Login Failed",
            }[self.state]
        return super().headline

    async def load(self) -> None:
        # Checked and set before the first await
        if self._processed:
            logfire.debug("Callback already processed")
            return
        self._processed = True

        try:
            self.flow = self._resolve_flow()
        except ValueError as e:
            logfire.warn("Rejected OAuth state", state=self.query.get("state"))
            self._update(state=CallbackState.ERROR, message=str(e))
            return

        try:
            outcome = await self.complete_callback.execute(
                CompleteOAuthCallbackRequest(
                    flow=self.flow,
                    code=self.query.get("code"),
                    error=self.query.get("error"),
                )
            )
        except DomainError as e:
            self._update(state=CallbackState.ERROR, message=str(e))
            return

        if not self._update(
            state=CallbackState.SUCCESS, message=outcome.message, outcome=outcome
        ):
            return

        await asyncio.sleep(self._delay(outcome))
        if self.mounted:
            self.navigator.navigate(outcome.destination, outcome.navigation_state)

    def retry(self) -> None:
        """Reload the page. The spent code is not exchanged again by this instance."""
        self.navigator.reload()

    def go_home(self) -> None:
        self.navigator.navigate(Route.HOME)

    def _resolve_flow(self) -> OAuthFlow:
        if self.pinned_flow is not None:
            return self.pinned_flow
        state = self.query.get("state")
        if not state and self.mailbox_page:
            if self.auth_session.is_authenticated:
                return OAuthFlow.EMAIL_ACCOUNT
            return OAuthFlow.EMAIL_ACCOUNT_PUBLIC
        return OAuthFlow.from_state(state)

    def _delay(self, outcome: CompleteOAuthCallbackResponse) -> float:
        if outcome.flow == OAuthFlow.MAIN_LOGIN:
            return self.ui_settings.login_redirect_delay
        if outcome.destination == Route.INVITE_SUCCESS:
            return self.ui_settings.invite_redirect_delay
        return self.ui_settings.account_redirect_delay
