"""Shared behaviour of the invite acceptance pages."""

from typing import ClassVar

import logfire

from invoicer.application.usecase.auth import LoginRequest, LoginUseCase
from invoicer.application.usecase.invite import (
    AcceptInviteRequest,
    AcceptInviteUseCase,
    ValidateInviteRequest,
    ValidateInviteUseCase,
)
from invoicer.application.usecase.oauth import (
    StartEmailConnectionRequest,
    StartEmailConnectionUseCase,
)
from invoicer.domain.error import (
    AuthenticationError,
    ConnectionStartError,
    SessionExpiredError,
)
from invoicer.domain.model import InviteDetails
from invoicer.domain.service import AuthSession, Navigator
from invoicer.domain.value import InviteState, InviteType, Route
from invoicer.interface.pages.base import Page
from invoicer.util.observability import redact


class InvitePage(Page):
    """Validates an invite on mount and walks it through acceptance.

    State machine::

        loading -> valid | invalid | expired | error
        valid -> accepting -> success | error
        error -> valid            (retry)

    Only one accept is ever in flight: accept() does nothing unless the
    state is ``valid``, and the state moves to ``accepting`` before the
    first await.
    """

    expected_type: ClassVar[InviteType | None] = None

    def __init__(
        self,
        token: str,
        validate_invite: ValidateInviteUseCase,
        accept_invite: AcceptInviteUseCase,
        start_connection: StartEmailConnectionUseCase,
        login: LoginUseCase,
        auth_session: AuthSession,
        navigator: Navigator,
    ) -> None:
        super().__init__()
        self.token = token
        self.validate_invite = validate_invite
        self.accept_invite = accept_invite
        self.start_connection = start_connection
        self.login = login
        self.auth_session = auth_session
        self.navigator = navigator

        self.state = InviteState.LOADING
        self.details: InviteDetails | None = None
        self.message: str | None = None
        self.error: str | None = None
        self.connecting = False

    @property
    def can_accept(self) -> bool:
        return self.state == InviteState.VALID

    async def load(self) -> None:
        if self.state != InviteState.LOADING:
            return

        result = await self.validate_invite.execute(
            ValidateInviteRequest(token=self.token, expected_type=self.expected_type)
        )
        if result.state == InviteState.VALID:
            self._update(state=result.state, details=result.details, message=result.message)
        else:
            self._update(state=result.state, error=result.message)

    async def accept(self) -> None:
        raise NotImplementedError

    def retry(self) -> None:
        """Go back to ``valid`` after a failed accept."""
        if self.state != InviteState.ERROR:
            return
        self.state = InviteState.VALID
        self.error = None

    def go_home(self) -> None:
        self.navigator.navigate(Route.HOME)

    def go_to_login(self) -> None:
        self.navigator.navigate(Route.LOGIN)

    async def log_in(self) -> None:
        """Start the main login; the invite stays where it was."""
        try:
            await self.login.execute(LoginRequest())
        except AuthenticationError as e:
            self._update(error=str(e))

    async def _accept(self, public: bool) -> bool:
        # Caller has checked can_accept; nothing awaits before this point
        self.state = InviteState.ACCEPTING
        self.error = None
        logfire.info(
            "Accepting invite",
            page=type(self).__name__,
            token=redact(self.token),
            public=public,
        )

        try:
            result = await self.accept_invite.execute(
                AcceptInviteRequest(token=self.token, public=public)
            )
        except SessionExpiredError as e:
            self._update(state=InviteState.ERROR, error=str(e))
            return False

        if not result.accepted:
            self._update(state=InviteState.ERROR, error=result.message)
            return False

        return self._update(state=InviteState.SUCCESS, message=result.message)

    async def _connect(self, public: bool) -> None:
        """Hand the accepted invite over to the mailbox OAuth flow."""
        if self.connecting:
            return
        self.connecting = True
        self.error = None

        try:
            await self.start_connection.execute(
                StartEmailConnectionRequest(invite_token=self.token, public=public)
            )
        except (ConnectionStartError, SessionExpiredError) as e:
            # The invite stays accepted; the user may try connecting again
            self._update(connecting=False, error=str(e))
