"""Backend infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
import logfire
from dishka import Scope, provide

from invoicer.adapter.backend import BackendClient, HttpBackendClient
from invoicer.config import Settings
from invoicer.domain.service import AuthSession
from invoicer.util.di.base import ProviderBase


class BackendProvider(ProviderBase):
    """Backend component base."""

    __mock_component__ = "backend"


class ProdBackendProvider(BackendProvider):
    """Production backend provider speaking HTTP to the REST API."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_http_client(self, settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the shared HTTP client, closed with the container."""
        async with httpx.AsyncClient(
            base_url=settings.api.base_url, timeout=settings.api.timeout
        ) as client:
            logfire.info(
                "Backend client opened",
                base_url=settings.api.base_url,
                timeout=settings.api.timeout,
            )
            yield client

    @provide(scope=Scope.APP)
    def get_backend_client(
        self, http: httpx.AsyncClient, auth_session: AuthSession
    ) -> BackendClient:
        """Provide backend client."""
        return HttpBackendClient(http=http, auth_session=auth_session)
