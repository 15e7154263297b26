"""Unit tests for CompleteOAuthCallbackUseCase."""

import pytest

from invoicer.adapter.backend import MockBackendClient
from invoicer.adapter.error import BackendError
from invoicer.application.usecase.oauth import (
    CompleteOAuthCallbackRequest,
    CompleteOAuthCallbackUseCase,
)
from invoicer.domain.error import ExchangeFailureError, OAuthProviderError
from invoicer.domain.service import AuthSession, InviteCorrelation
from invoicer.domain.value import InviteToken, OAuthFlow, Route
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestProviderErrors:
    """The provider's answer is checked before anything is exchanged."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("flow", list(OAuthFlow))
    async def test_error_param_makes_no_exchange(self, unit_env, flow):
        backend = await unit_env.get(MockBackendClient)
        use_case = await unit_env.get(CompleteOAuthCallbackUseCase)

        with pytest.raises(OAuthProviderError) as exc_info:
            await use_case.execute(
                CompleteOAuthCallbackRequest(flow=flow, code="C1", error="access_denied")
            )

        assert exc_info.value.error_code == "access_denied"
        assert str(exc_info.value) == "OAuth error: access_denied"
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_missing_code(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        use_case = await unit_env.get(CompleteOAuthCallbackUseCase)

        with pytest.raises(OAuthProviderError, match="No authorization code received"):
            await use_case.execute(
                CompleteOAuthCallbackRequest(flow=OAuthFlow.EMAIL_ACCOUNT_PUBLIC)
            )

        assert backend.calls == []


class TestMainLogin:
    """Tests for the main login exchange."""

    @pytest.mark.asyncio
    async def test_login_stores_session(self, unit_env):
        auth_session = await unit_env.get(AuthSession)
        use_case = await unit_env.get(CompleteOAuthCallbackUseCase)

        response = await use_case.execute(
            CompleteOAuthCallbackRequest(flow=OAuthFlow.MAIN_LOGIN, code="C1")
        )

        assert response.destination == Route.DASHBOARD
        assert response.message == "Login successful!"
        assert auth_session.is_authenticated
        assert auth_session.access_token == "mock-access-token"

    @pytest.mark.asyncio
    async def test_reused_code_is_rejected_with_backend_detail(self, unit_env):
        use_case = await unit_env.get(CompleteOAuthCallbackUseCase)
        request = CompleteOAuthCallbackRequest(flow=OAuthFlow.MAIN_LOGIN, code="C1")

        await use_case.execute(request)
        with pytest.raises(ExchangeFailureError) as exc_info:
            await use_case.execute(request)

        assert str(exc_info.value) == (
            "Authorization code has expired or already been used. Please try again."
        )
        assert exc_info.value.status_code == 400


class TestMailboxFlows:
    """Tests for the mailbox exchanges and invite correlation."""

    @pytest.mark.asyncio
    async def test_public_exchange_with_invite_goes_to_success_view(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        correlation = await unit_env.get(InviteCorrelation)
        correlation.stash(InviteToken(root="T1"))
        use_case = await unit_env.get(CompleteOAuthCallbackUseCase)

        response = await use_case.execute(
            CompleteOAuthCallbackRequest(flow=OAuthFlow.EMAIL_ACCOUNT_PUBLIC, code="C1")
        )

        assert backend.calls == ["exchange_oauth_code_public"]
        assert response.destination == Route.INVITE_SUCCESS
        assert response.navigation_state == {
            "message": "Email account connected successfully!",
            "email": "invited@example.com",
            "inviter_user_id": "user-1",
        }
        assert correlation.peek() is None

    @pytest.mark.asyncio
    async def test_authenticated_exchange_without_invite_goes_to_list(self, unit_env):
        (await unit_env.get(AuthSession)).set_user_data(make_user(), "tok")
        backend = await unit_env.get(MockBackendClient)
        use_case = await unit_env.get(CompleteOAuthCallbackUseCase)

        response = await use_case.execute(
            CompleteOAuthCallbackRequest(flow=OAuthFlow.EMAIL_ACCOUNT, code="C1")
        )

        assert backend.calls == ["exchange_oauth_code"]
        assert response.destination == Route.EMAIL_ACCOUNTS
        assert response.email == "invited@example.com"

    @pytest.mark.asyncio
    async def test_authenticated_exchange_without_session(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        use_case = await unit_env.get(CompleteOAuthCallbackUseCase)

        with pytest.raises(
            ExchangeFailureError, match="User not authenticated. Please log in first."
        ):
            await use_case.execute(
                CompleteOAuthCallbackRequest(flow=OAuthFlow.EMAIL_ACCOUNT, code="C1")
            )

        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_failed_exchange_keeps_correlation(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        backend.fail("exchange_oauth_code_public", 500)
        correlation = await unit_env.get(InviteCorrelation)
        correlation.stash(InviteToken(root="T1"))
        use_case = await unit_env.get(CompleteOAuthCallbackUseCase)

        with pytest.raises(ExchangeFailureError) as exc_info:
            await use_case.execute(
                CompleteOAuthCallbackRequest(flow=OAuthFlow.EMAIL_ACCOUNT_PUBLIC, code="C1")
            )

        assert str(exc_info.value) == "Failed to exchange authorization code (HTTP 500)"
        assert correlation.peek() == InviteToken(root="T1")

    @pytest.mark.asyncio
    async def test_transport_failure_message(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        backend.failures["exchange_oauth_code_public"] = BackendError("connect failed")
        use_case = await unit_env.get(CompleteOAuthCallbackUseCase)

        with pytest.raises(ExchangeFailureError, match="^Failed to exchange authorization code$"):
            await use_case.execute(
                CompleteOAuthCallbackRequest(flow=OAuthFlow.EMAIL_ACCOUNT_PUBLIC, code="C1")
            )
