"""Logout use case."""

from pydantic import BaseModel

from invoicer.domain.service import AuthSession, Navigator
from invoicer.domain.value import Route


class LogoutRequest(BaseModel):
    """Logout request."""


class LogoutUseCase:
    """Use case for dropping the session and returning to the home page."""

    def __init__(self, auth_session: AuthSession, navigator: Navigator) -> None:
        self.auth_session = auth_session
        self.navigator = navigator

    async def execute(self, request: LogoutRequest) -> None:
        self.auth_session.logout()
        self.navigator.navigate(Route.HOME)
