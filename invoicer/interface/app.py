"""Client application host.

Opens pages by URL, one DI request scope per page load, and follows the
navigator when a page moves the user elsewhere.
"""

from contextlib import AsyncExitStack
from typing import Any
from urllib.parse import parse_qsl, urlsplit

import logfire
from dishka import AsyncContainer

from invoicer.adapter.browser import HistoryNavigator
from invoicer.application.usecase.auth import LoginUseCase
from invoicer.application.usecase.invite import (
    AcceptInviteUseCase,
    ValidateInviteUseCase,
)
from invoicer.application.usecase.oauth import (
    CompleteOAuthCallbackUseCase,
    StartEmailConnectionUseCase,
)
from invoicer.config import Settings, UISettings
from invoicer.domain.service import AuthSession
from invoicer.domain.value import OAuthFlow
from invoicer.interface.pages.add_email_invite import AddEmailInvitePage
from invoicer.interface.pages.base import Page
from invoicer.interface.pages.invite_accept import InviteAcceptPage
from invoicer.interface.pages.invite_success import InviteSuccessView
from invoicer.interface.pages.login import LoginPage
from invoicer.interface.pages.oauth_callback import OAuthCallbackPage
from invoicer.interface.router import RouteMatch, build_router
from invoicer.util.di.container import create_container
from invoicer.util.logging import setup_logging
from invoicer.util.observability import configure_logfire, instrument_httpx


class ClientApp:
    """Hosts one page at a time."""

    def __init__(self, container: AsyncContainer) -> None:
        """Initialize client app.

        Args:
            container: APP-scoped DI container
        """
        self.container = container
        self.router = build_router()
        self.page: Page | None = None
        self._page_scope: AsyncExitStack | None = None

    async def open(self, url: str, state: dict[str, Any] | None = None) -> Page:
        """Unmount the current page and mount the one for ``url``.

        Args:
            url: Client path, optionally with a query string
            state: Navigation state for the new page

        Raises:
            RouteNotFoundError: If no page serves the path
        """
        parts = urlsplit(url)
        match = self.router.resolve(parts.path)
        query = dict(parse_qsl(parts.query))

        await self.close_page()

        stack = AsyncExitStack()
        request_container = await stack.enter_async_context(self.container())
        try:
            page = await self._build(match, query, state or {}, request_container)
        except Exception:
            await stack.aclose()
            raise

        self.page = page
        self._page_scope = stack
        logfire.info("Page opened", page=match.name, path=parts.path)
        await page.mount()
        return page

    async def follow(self) -> Page | None:
        """Open the navigator's current location if it is a client route."""
        navigator = await self.container.get(HistoryNavigator)
        entry = navigator.current
        if entry is None or entry.external:
            return None
        return await self.open(entry.location, entry.state)

    async def close_page(self) -> None:
        if self.page is not None:
            self.page.unmount()
            self.page = None
        if self._page_scope is not None:
            await self._page_scope.aclose()
            self._page_scope = None

    async def close(self) -> None:
        await self.close_page()
        await self.container.close()

    async def _build(
        self,
        match: RouteMatch,
        query: dict[str, str],
        state: dict[str, Any],
        container: AsyncContainer,
    ) -> Page:
        navigator = await container.get(HistoryNavigator)

        if match.name == "login":
            return LoginPage(login=await container.get(LoginUseCase))

        if match.name == "invite_success":
            return InviteSuccessView(navigator=navigator, state=state)

        auth_session = await container.get(AuthSession)

        if match.name in ("invite_accept", "add_email_invite"):
            page_class = (
                AddEmailInvitePage
                if match.name == "add_email_invite"
                else InviteAcceptPage
            )
            return page_class(
                token=match.params["token"],
                validate_invite=await container.get(ValidateInviteUseCase),
                accept_invite=await container.get(AcceptInviteUseCase),
                start_connection=await container.get(StartEmailConnectionUseCase),
                login=await container.get(LoginUseCase),
                auth_session=auth_session,
                navigator=navigator,
            )

        # The remaining routes are OAuth callbacks
        pinned_flow = (
            OAuthFlow.EMAIL_ACCOUNT_PUBLIC
            if match.name == "email_account_callback_public"
            else None
        )
        return OAuthCallbackPage(
            query=query,
            complete_callback=await container.get(CompleteOAuthCallbackUseCase),
            auth_session=auth_session,
            navigator=navigator,
            ui_settings=await container.get(UISettings),
            pinned_flow=pinned_flow,
            mailbox_page=match.name == "email_account_callback",
        )


def create_app(settings: Settings | None = None) -> ClientApp:
    """Create the client application.

    Configures logging and Logfire, instruments httpx, then builds the
    production container around the same settings.
    """
    settings = settings or Settings()
    setup_logging(settings)
    configure_logfire(settings)
    instrument_httpx()
    return ClientApp(create_container(settings))
