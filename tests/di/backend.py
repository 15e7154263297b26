"""Mock backend providers for testing."""

from dishka import Scope, provide

from invoicer.adapter.backend import BackendClient, MockBackendClient
from invoicer.domain.service import AuthSession
from invoicer.util.di.infrastructure.backend import BackendProvider


class MockBackendProvider(BackendProvider):
    """Mock backend provider using the in-memory backend.

    The mock is APP-scoped so a test can seed it and then observe what
    every page load sent.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mock_backend(self, auth_session: AuthSession) -> MockBackendClient:
        """Provide in-memory backend."""
        return MockBackendClient(auth_session)

    @provide(scope=Scope.APP)
    def get_backend_client(self, backend: MockBackendClient) -> BackendClient:
        return backend
