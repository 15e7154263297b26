"""Complete OAuth callback use case."""

from typing import Any, Awaitable, TypeVar

import logfire
from pydantic import BaseModel

from invoicer.adapter.backend import BackendClient
from invoicer.adapter.error import BackendError, MalformedResponseError
from invoicer.config import OAuthSettings
from invoicer.domain.error import ExchangeFailureError, OAuthProviderError
from invoicer.domain.service import AuthSession, InviteCorrelation
from invoicer.domain.value import OAuthFlow, Route
from invoicer.util.observability import redact

T = TypeVar("T")

CONNECTED_MESSAGE = "Email account connected successfully!"


class CompleteOAuthCallbackRequest(BaseModel):
    """Query parameters the identity provider sent back."""

    flow: OAuthFlow
    code: str | None = None
    error: str | None = None


class CompleteOAuthCallbackResponse(BaseModel):
    """Where the callback page should go next."""

    flow: OAuthFlow
    destination: Route
    navigation_state: dict[str, Any] = {}
    message: str
    email: str | None = None


class CompleteOAuthCallbackUseCase:
    """Use case for exchanging an authorization code after the provider redirect.

    Flow handling:
    - MAIN_LOGIN: exchange for a session, then go to the dashboard
    - EMAIL_ACCOUNT: authenticated mailbox exchange
    - EMAIL_ACCOUNT_PUBLIC: public mailbox exchange for an invited user

    After a mailbox exchange succeeds the invite correlation is taken: if
    one was pending the user goes to the invite-success view, otherwise to
    the mailbox list.

    Each call sends at most one exchange request; a code is never retried.
    """

    def __init__(
        self,
        backend: BackendClient,
        auth_session: AuthSession,
        correlation: InviteCorrelation,
        oauth_settings: OAuthSettings,
    ) -> None:
        """Initialize complete OAuth callback use case.

        Args:
            backend: Backend client
            auth_session: Receives the session on main login
            correlation: Pending invite token, taken after a mailbox exchange
            oauth_settings: Mailbox provider configuration
        """
        self.backend = backend
        self.auth_session = auth_session
        self.correlation = correlation
        self.oauth_settings = oauth_settings

    async def execute(
        self, request: CompleteOAuthCallbackRequest
    ) -> CompleteOAuthCallbackResponse:
        """Exchange the code for the given flow.

        Args:
            request: Flow and provider query parameters

        Returns:
            Destination route, navigation state and a message to show

        Raises:
            OAuthProviderError: If the provider sent an error or no code
            ExchangeFailureError: If the backend rejected the code
            SessionExpiredError: If the authenticated exchange got a 401
        """
        if request.error:
            logfire.warn("Identity provider returned an error", error=request.error)
            raise OAuthProviderError(request.error)

        if not request.code:
            logfire.warn("Callback without authorization code", flow=request.flow.value)
            raise OAuthProviderError(message="No authorization code received")

        code = request.code
        with logfire.span(
            "complete_oauth_callback", flow=request.flow.value, code=redact(code)
        ):
            if not request.flow.connects_mailbox:
                return await self._login(code)
            return await self._connect_mailbox(request.flow, code)

    async def _login(self, code: str) -> CompleteOAuthCallbackResponse:
        result = await self._exchange(self.backend.exchange_login_code(code))
        self.auth_session.set_user_data(result.user, result.access_token)
        return CompleteOAuthCallbackResponse(
            flow=OAuthFlow.MAIN_LOGIN,
            destination=Route.DASHBOARD,
            message="Login successful!",
            email=result.user.email,
        )

    async def _connect_mailbox(
        self, flow: OAuthFlow, code: str
    ) -> CompleteOAuthCallbackResponse:
        provider = self.oauth_settings.provider

        if flow == OAuthFlow.EMAIL_ACCOUNT:
            if not self.auth_session.is_authenticated:
                raise ExchangeFailureError("User not authenticated. Please log in first.")
            result = await self._exchange(
                self.backend.exchange_oauth_code(provider, code)
            )
        else:
            result = await self._exchange(
                self.backend.exchange_oauth_code_public(provider, code)
            )

        message = result.message or CONNECTED_MESSAGE
        invite_token = self.correlation.take()

        if invite_token is None:
            logfire.info("Mailbox connected", flow=flow.value, email=result.email)
            return CompleteOAuthCallbackResponse(
                flow=flow,
                destination=Route.EMAIL_ACCOUNTS,
                message=message,
                email=result.email,
            )

        logfire.info(
            "Mailbox connected for invite",
            flow=flow.value,
            email=result.email,
            token=redact(invite_token.root),
        )
        return CompleteOAuthCallbackResponse(
            flow=flow,
            destination=Route.INVITE_SUCCESS,
            navigation_state={
                "message": message,
                "email": result.email,
                "inviter_user_id": result.inviter_user_id,
            },
            message=message,
            email=result.email,
        )

    async def _exchange(self, call: Awaitable[T]) -> T:
        try:
            return await call
        except BackendError as e:
            logfire.warn(
                "Authorization code exchange failed",
                status_code=e.status_code,
                detail=e.detail,
            )
            if e.detail:
                raise ExchangeFailureError(e.detail, status_code=e.status_code) from e
            if e.status_code is not None:
                raise ExchangeFailureError(
                    f"Failed to exchange authorization code (HTTP {e.status_code})",
                    status_code=e.status_code,
                ) from e
            raise ExchangeFailureError("Failed to exchange authorization code") from e
        except MalformedResponseError as e:
            raise ExchangeFailureError("Failed to exchange authorization code") from e
