"""Login page (``/login``)."""

from invoicer.application.usecase.auth import LoginRequest, LoginUseCase
from invoicer.domain.error import AuthenticationError
from invoicer.interface.pages.base import Page


class LoginPage(Page):
    """Offers the Google login; also where an expired session lands."""

    def __init__(self, login: LoginUseCase) -> None:
        super().__init__()
        self.login = login
        self.redirecting = False
        self.error: str | None = None

    async def log_in(self) -> None:
        if self.redirecting:
            return
        self.redirecting = True
        self.error = None
        try:
            await self.login.execute(LoginRequest())
        except AuthenticationError as e:
            self._update(redirecting=False, error=str(e))
