"""Unit tests for OAuthCallbackPage."""

import asyncio

import pytest

from invoicer.adapter.backend import MockBackendClient
from invoicer.adapter.browser import HistoryNavigator
from invoicer.application.usecase.oauth import CompleteOAuthCallbackUseCase
from invoicer.config import UISettings
from invoicer.domain.service import AuthSession, InviteCorrelation
from invoicer.domain.value import CallbackState, InviteToken, OAuthFlow
from invoicer.interface.pages.oauth_callback import OAuthCallbackPage
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def build_page(env, query, ui_settings=None, **kwargs):
    return OAuthCallbackPage(
        query=query,
        complete_callback=await env.get(CompleteOAuthCallbackUseCase),
        auth_session=await env.get(AuthSession),
        navigator=await env.get(HistoryNavigator),
        ui_settings=ui_settings or UISettings(
            invite_redirect_delay=0, account_redirect_delay=0, login_redirect_delay=0
        ),
        **kwargs,
    )


class TestOAuthCallbackPage:
    """Tests for OAuthCallbackPage."""

    @pytest.mark.asyncio
    async def test_provider_error_makes_no_exchange(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        page = await build_page(
            unit_env, {"error": "access_denied", "state": "email_account_oauth_public"}
        )

        await page.mount()

        assert page.state == CallbackState.ERROR
        assert page.headline == "Connection Failed"
        assert page.message == "OAuth error: access_denied"
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_unknown_state_makes_no_exchange(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        page = await build_page(unit_env, {"code": "C1", "state": "somebody_elses"})

        await page.mount()

        assert page.state == CallbackState.ERROR
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_double_mount_exchanges_once(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        backend.latency = 0.01
        page = await build_page(
            unit_env, {"code": "C1", "state": "email_account_oauth_public"}
        )

        await asyncio.gather(page.mount(), page.mount())

        assert backend.count("exchange_oauth_code_public") == 1
        assert page.state == CallbackState.SUCCESS

    @pytest.mark.asyncio
    async def test_main_login(self, unit_env):
        navigator = await unit_env.get(HistoryNavigator)
        auth_session = await unit_env.get(AuthSession)
        page = await build_page(unit_env, {"code": "C1"})

        await page.mount()

        assert page.flow == OAuthFlow.MAIN_LOGIN
        assert page.state == CallbackState.SUCCESS
        assert page.headline == "Login Successful!"
        assert auth_session.is_authenticated
        assert navigator.current.location == "/dashboard"

    @pytest.mark.asyncio
    async def test_invite_flow_lands_on_success_view(self, unit_env):
        navigator = await unit_env.get(HistoryNavigator)
        correlation = await unit_env.get(InviteCorrelation)
        correlation.stash(InviteToken(root="T1"))
        page = await build_page(
            unit_env, {"code": "C1", "state": "email_account_oauth_public"}
        )

        await page.mount()

        assert page.headline == "Email Account Connected!"
        assert navigator.current.location == "/invite-success"
        assert navigator.current.state["email"] == "invited@example.com"

    @pytest.mark.asyncio
    async def test_exchange_failure_shows_backend_detail(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        backend.fail("exchange_oauth_code_public", 400, detail="Invalid authorization code")
        navigator = await unit_env.get(HistoryNavigator)
        page = await build_page(
            unit_env, {"code": "C1", "state": "email_account_oauth_public"}
        )

        await page.mount()

        assert page.state == CallbackState.ERROR
        assert page.message == "Invalid authorization code"
        assert navigator.history == []

    @pytest.mark.asyncio
    async def test_pinned_flow_ignores_state(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        page = await build_page(
            unit_env,
            {"code": "C1", "state": "email_account_oauth"},
            pinned_flow=OAuthFlow.EMAIL_ACCOUNT_PUBLIC,
        )

        await page.mount()

        assert backend.calls == ["exchange_oauth_code_public"]

    @pytest.mark.asyncio
    async def test_mailbox_page_without_state_follows_session(self, unit_env):
        backend = await unit_env.get(MockBackendClient)

        anonymous = await build_page(unit_env, {"code": "C1"}, mailbox_page=True)
        await anonymous.mount()
        (await unit_env.get(AuthSession)).set_user_data(make_user(), "tok")
        signed_in = await build_page(unit_env, {"code": "C2"}, mailbox_page=True)
        await signed_in.mount()

        assert anonymous.flow == OAuthFlow.EMAIL_ACCOUNT_PUBLIC
        assert signed_in.flow == OAuthFlow.EMAIL_ACCOUNT
        assert backend.calls == ["exchange_oauth_code_public", "exchange_oauth_code"]

    @pytest.mark.asyncio
    async def test_leaving_during_delay_cancels_navigation(self, unit_env):
        navigator = await unit_env.get(HistoryNavigator)
        page = await build_page(
            unit_env,
            {"code": "C1", "state": "email_account_oauth_public"},
            ui_settings=UISettings(account_redirect_delay=0.2),
        )

        task = asyncio.create_task(page.mount())
        await asyncio.sleep(0.05)
        assert page.state == CallbackState.SUCCESS
        page.unmount()
        await task

        assert navigator.history == []

    @pytest.mark.asyncio
    async def test_retry_reloads(self, unit_env):
        navigator = await unit_env.get(HistoryNavigator)
        page = await build_page(unit_env, {"error": "access_denied"})
        await page.mount()

        page.retry()

        assert navigator.reloads == 1
        assert page.headline == "Login Failed"
