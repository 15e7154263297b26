"""Invite success view (``/invite-success``)."""

from typing import Any

from invoicer.domain.service import Navigator
from invoicer.domain.value import Route
from invoicer.interface.pages.base import Page

DEFAULT_MESSAGE = "Your email account has been successfully connected to the system."


class InviteSuccessView(Page):
    """Confirmation shown to an invited user after their mailbox is connected.

    Reads ``message``, ``email`` and ``inviter_user_id`` from the navigation
    state; opened without state it shows the generic message.
    """

    def __init__(self, navigator: Navigator, state: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.navigator = navigator
        state = state or {}
        self.message: str = state.get("message") or DEFAULT_MESSAGE
        self.email: str | None = state.get("email")
        self.inviter_user_id: str | None = state.get("inviter_user_id")

    @property
    def headline(self) -> str:
        return "Email Account Connected!"

    def close(self) -> None:
        self.navigator.navigate(Route.HOME)
