"""Accept invite use case."""

import logfire
from pydantic import BaseModel

from invoicer.adapter.backend import BackendClient
from invoicer.adapter.error import BackendError, MalformedResponseError
from invoicer.domain.error import AcceptanceFailureError
from invoicer.domain.value import EmailAccountId, InviteToken
from invoicer.util.observability import redact


class AcceptInviteRequest(BaseModel):
    """Accept invite request."""

    token: str
    # Public acceptance needs no session; used by brand-new invited users
    public: bool = False


class AcceptInviteResponse(BaseModel):
    """Accept invite response."""

    accepted: bool
    message: str | None = None
    email_account_id: EmailAccountId | None = None


class AcceptInviteUseCase:
    """Use case for redeeming an invite.

    Failures come back as ``accepted=False`` with a message; only
    SessionExpiredError (a 401 on the authenticated variant) propagates.
    """

    def __init__(self, backend: BackendClient) -> None:
        """Initialize accept invite use case.

        Args:
            backend: Backend client
        """
        self.backend = backend

    async def execute(self, request: AcceptInviteRequest) -> AcceptInviteResponse:
        """Accept an invite.

        Args:
            request: Token and acceptance variant

        Returns:
            Whether the backend accepted the invite, with its message
        """
        token = InviteToken(root=request.token)

        with logfire.span(
            "accept_invite.execute", token=redact(token.root), public=request.public
        ):
            try:
                if request.public:
                    result = await self.backend.accept_invite_public(token)
                else:
                    result = await self.backend.accept_invite(token)
            except BackendError as e:
                logfire.warn(
                    "Invite acceptance refused",
                    token=redact(token.root),
                    status_code=e.status_code,
                )
                return _failed(e.detail)
            except MalformedResponseError as e:
                logfire.error("Unreadable acceptance response", error=str(e))
                return _failed()

            if not result.success:
                logfire.warn(
                    "Invite acceptance unsuccessful",
                    token=redact(token.root),
                    message=result.message,
                )
                return _failed(result.message)

            logfire.info(
                "Invite accepted", token=redact(token.root), public=request.public
            )
            return AcceptInviteResponse(
                accepted=True,
                message=result.message,
                email_account_id=result.email_account_id,
            )


def _failed(message: str | None = None) -> AcceptInviteResponse:
    return AcceptInviteResponse(
        accepted=False, message=message or str(AcceptanceFailureError())
    )
