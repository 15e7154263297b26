"""Add-email-account invite page (``/invite/add-email/{token}``)."""

from invoicer.domain.value import InviteState, InviteType
from invoicer.interface.pages.invite import InvitePage


class AddEmailInvitePage(InvitePage):
    """Accepts an add_email_account invite, with or without a session.

    With a session the invite is accepted and the mailbox authorization
    starts right away. A brand-new user accepts publicly: the invite is
    consumed, the page shows a login prompt, and the mailbox is connected
    later through connect_email_account().
    """

    expected_type = InviteType.ADD_EMAIL_ACCOUNT
    headlines = {
        InviteState.LOADING.value: "Validating Invite",
        InviteState.VALID.value: "Email Account Invite",
        InviteState.INVALID.value: "Invalid Invite Link",
        InviteState.EXPIRED.value: "Invite Link Expired",
        InviteState.ACCEPTING.value: "Accepting Invite",
        InviteState.SUCCESS.value: "Invite Accepted!",
        InviteState.ERROR.value: "Error",
    }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.show_login_prompt = False

    @property
    def invited_email(self) -> str | None:
        return self.details.invited_email if self.details else None

    async def accept(self) -> None:
        if not self.can_accept:
            return

        public = not self.auth_session.is_authenticated
        if not await self._accept(public=public):
            return

        if public:
            self._update(show_login_prompt=True)
            return

        await self._connect(public=False)

    async def connect_email_account(self) -> None:
        """Start the mailbox authorization for an accepted invite."""
        if self.state != InviteState.SUCCESS:
            return
        await self._connect(public=not self.auth_session.is_authenticated)
