"""Mailbox sharing invite page (``/invite/{token}``)."""

from invoicer.domain.value import InviteState, InviteType
from invoicer.interface.pages.invite import InvitePage


class InviteAcceptPage(InvitePage):
    """Accepts a share_access invite; requires a session.

    Without a session, accept() starts the login flow and leaves the invite
    untouched. With one, a successful accept goes straight on to the
    mailbox authorization redirect.
    """

    expected_type = InviteType.SHARE_ACCESS
    headlines = {
        InviteState.LOADING.value: "Validating Invite",
        InviteState.VALID.value: "You're Invited!",
        InviteState.INVALID.value: "Invalid Invite",
        InviteState.EXPIRED.value: "Invite Expired",
        InviteState.ACCEPTING.value: "Accepting Invite",
        InviteState.SUCCESS.value: "Welcome!",
        InviteState.ERROR.value: "Error",
    }

    async def accept(self) -> None:
        if not self.can_accept:
            return

        if not self.auth_session.is_authenticated:
            await self.log_in()
            return

        if await self._accept(public=False):
            await self._connect(public=False)
