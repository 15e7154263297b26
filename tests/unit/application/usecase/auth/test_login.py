"""Unit tests for LoginUseCase and LogoutUseCase."""

from dishka import AsyncContainer
import pytest

from invoicer.adapter.backend import MockBackendClient
from invoicer.adapter.backend.schemas import AuthUrlResponse
from invoicer.adapter.browser import HistoryNavigator
from invoicer.application.usecase.auth import (
    LoginRequest,
    LoginUseCase,
    LogoutRequest,
    LogoutUseCase,
)
from invoicer.domain.error import AuthenticationError
from invoicer.domain.service import AuthSession
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_login_redirects_to_provider(self, unit_env: AsyncContainer):
        """Login should send the user to the URL the backend built."""
        # Arrange
        backend = await unit_env.get(MockBackendClient)
        navigator = await unit_env.get(HistoryNavigator)
        use_case = await unit_env.get(LoginUseCase)

        # Act
        response = await use_case.execute(LoginRequest())

        # Assert
        assert response.auth_url == backend.auth_url
        assert navigator.redirects == [backend.auth_url]

    @pytest.mark.asyncio
    async def test_login_refused(self, unit_env: AsyncContainer):
        # Arrange
        backend = await unit_env.get(MockBackendClient)
        backend.fail("get_login_url", 503, detail="Google OAuth not configured")
        navigator = await unit_env.get(HistoryNavigator)
        use_case = await unit_env.get(LoginUseCase)

        # Act & Assert
        with pytest.raises(AuthenticationError, match="Google OAuth not configured"):
            await use_case.execute(LoginRequest())
        assert navigator.history == []

    @pytest.mark.asyncio
    async def test_login_without_url(self, unit_env: AsyncContainer):
        backend = await unit_env.get(MockBackendClient)

        async def no_url():
            return AuthUrlResponse()

        backend.get_login_url = no_url
        use_case = await unit_env.get(LoginUseCase)

        with pytest.raises(AuthenticationError, match="Failed to start login"):
            await use_case.execute(LoginRequest())


class TestLogoutUseCase:
    """Tests for LogoutUseCase."""

    @pytest.mark.asyncio
    async def test_logout_clears_session_and_goes_home(self, unit_env: AsyncContainer):
        # Arrange
        auth_session = await unit_env.get(AuthSession)
        auth_session.set_user_data(make_user(), "tok")
        navigator = await unit_env.get(HistoryNavigator)
        use_case = await unit_env.get(LogoutUseCase)

        # Act
        await use_case.execute(LogoutRequest())

        # Assert
        assert auth_session.is_authenticated is False
        assert auth_session.store.get("access_token") is None
        assert navigator.current.location == "/"
