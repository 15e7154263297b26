"""Login use case."""

import logfire
from pydantic import BaseModel

from invoicer.adapter.backend import BackendClient
from invoicer.adapter.error import BackendError, MalformedResponseError
from invoicer.domain.error import AuthenticationError
from invoicer.domain.service import Navigator


class LoginRequest(BaseModel):
    """Login request.

    Nothing to send: the backend builds the Google authorization URL and
    the provider comes back to /auth/callback without a ``state``.
    """


class LoginResponse(BaseModel):
    """Login response."""

    auth_url: str


class LoginUseCase:
    """Use case for starting the main Google login."""

    def __init__(self, backend: BackendClient, navigator: Navigator) -> None:
        """Initialize login use case.

        Args:
            backend: Backend client
            navigator: Performs the full-context redirect
        """
        self.backend = backend
        self.navigator = navigator

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Fetch the login URL and redirect to it.

        Raises:
            AuthenticationError: If the backend gave no usable URL
        """
        with logfire.span("login.start"):
            try:
                result = await self.backend.get_login_url()
            except BackendError as e:
                logfire.warn("Login URL request refused", status_code=e.status_code)
                raise AuthenticationError(e.detail or str(AuthenticationError())) from e
            except MalformedResponseError as e:
                raise AuthenticationError() from e

            if not result.auth_url:
                raise AuthenticationError()

            self.navigator.redirect(result.auth_url)
            return LoginResponse(auth_url=result.auth_url)
