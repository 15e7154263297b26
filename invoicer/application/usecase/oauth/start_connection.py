"""Start email connection use case."""

import logfire
from pydantic import BaseModel

from invoicer.adapter.backend import BackendClient
from invoicer.adapter.error import BackendError, MalformedResponseError
from invoicer.config import OAuthSettings
from invoicer.domain.error import ConnectionStartError
from invoicer.domain.service import InviteCorrelation, Navigator
from invoicer.domain.value import InviteToken
from invoicer.util.observability import redact


class StartEmailConnectionRequest(BaseModel):
    """Start email connection request."""

    # Invite being redeemed, if any; carried across the redirect
    invite_token: str | None = None
    public: bool = False


class StartEmailConnectionResponse(BaseModel):
    """Start email connection response."""

    auth_url: str
    correlated: bool


class StartEmailConnectionUseCase:
    """Use case for sending the user to the identity provider to connect a mailbox.

    The authorization URL embeds a one-time provider request, so it is
    fetched fresh on every call. The invite token is stashed only once a URL
    is in hand, right before the redirect. A connection started without an
    invite drops any token still pending from an earlier handoff.
    """

    def __init__(
        self,
        backend: BackendClient,
        correlation: InviteCorrelation,
        navigator: Navigator,
        oauth_settings: OAuthSettings,
    ) -> None:
        """Initialize start email connection use case.

        Args:
            backend: Backend client
            correlation: Session-scoped invite correlation
            navigator: Performs the full-context redirect
            oauth_settings: Mailbox provider configuration
        """
        self.backend = backend
        self.correlation = correlation
        self.navigator = navigator
        self.oauth_settings = oauth_settings

    async def execute(
        self, request: StartEmailConnectionRequest
    ) -> StartEmailConnectionResponse:
        """Fetch the authorization URL and redirect to it.

        Args:
            request: Optional invite token and endpoint variant

        Returns:
            The URL the user was sent to

        Raises:
            ConnectionStartError: If no authorization URL could be obtained
            SessionExpiredError: If the authenticated variant got a 401
        """
        token = InviteToken(root=request.invite_token) if request.invite_token else None
        provider = self.oauth_settings.provider

        with logfire.span(
            "start_email_connection",
            provider=provider,
            public=request.public,
            token=redact(token.root if token else None),
        ):
            try:
                if request.public:
                    result = await self.backend.get_oauth_url_public(provider)
                else:
                    result = await self.backend.get_oauth_url(provider)
            except BackendError as e:
                logfire.warn(
                    "Authorization URL request refused", status_code=e.status_code
                )
                raise ConnectionStartError(e.detail or str(ConnectionStartError())) from e
            except MalformedResponseError as e:
                raise ConnectionStartError() from e

            if not result.auth_url:
                logfire.error("Backend returned no authorization URL", provider=provider)
                raise ConnectionStartError()

            if token is not None:
                self.correlation.stash(token)
            else:
                pending = self.correlation.peek()
                if pending is not None:
                    # Left over from an invite handoff that never came back
                    logfire.info(
                        "Discarding stale invite correlation", token=redact(pending.root)
                    )
                    self.correlation.clear()

            self.navigator.redirect(result.auth_url)
            return StartEmailConnectionResponse(
                auth_url=result.auth_url, correlated=token is not None
            )
