"""Unit tests for InviteSuccessView and LoginPage."""

import pytest

from invoicer.adapter.backend import MockBackendClient
from invoicer.adapter.browser import HistoryNavigator
from invoicer.application.usecase.auth import LoginUseCase
from invoicer.interface.pages.invite_success import InviteSuccessView
from invoicer.interface.pages.login import LoginPage
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestInviteSuccessView:
    """Tests for InviteSuccessView."""

    def test_reads_navigation_state(self):
        view = InviteSuccessView(
            HistoryNavigator(),
            {"message": "Connected", "email": "a@example.com", "inviter_user_id": "user-1"},
        )

        assert view.headline == "Email Account Connected!"
        assert view.message == "Connected"
        assert view.email == "a@example.com"
        assert view.inviter_user_id == "user-1"

    def test_defaults_without_state(self):
        view = InviteSuccessView(HistoryNavigator())

        assert view.message == (
            "Your email account has been successfully connected to the system."
        )
        assert view.email is None
        assert view.inviter_user_id is None

    def test_close_goes_home(self):
        navigator = HistoryNavigator()
        InviteSuccessView(navigator).close()

        assert navigator.current.location == "/"


class TestLoginPage:
    """Tests for LoginPage."""

    @pytest.mark.asyncio
    async def test_log_in_redirects(self, unit_env):
        navigator = await unit_env.get(HistoryNavigator)
        page = LoginPage(login=await unit_env.get(LoginUseCase))
        await page.mount()

        await page.log_in()

        assert page.redirecting is True
        assert len(navigator.redirects) == 1

    @pytest.mark.asyncio
    async def test_failure_allows_another_try(self, unit_env):
        backend = await unit_env.get(MockBackendClient)
        backend.fail("get_login_url", 500)
        page = LoginPage(login=await unit_env.get(LoginUseCase))
        await page.mount()

        await page.log_in()

        assert page.redirecting is False
        assert page.error == "Failed to start login"
