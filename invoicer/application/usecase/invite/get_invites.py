"""Get invites use cases."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from invoicer.adapter.backend import BackendClient
from invoicer.adapter.error import BackendError, MalformedResponseError
from invoicer.domain.error import InviteListError, InviteNotFoundError
from invoicer.domain.model import InviteRecord
from invoicer.domain.value import InviteId, InviteStatus


class GetInvitesRequest(BaseModel):
    """Get invites request."""

    status: InviteStatus | None = None
    # Drop used and expired invites, including ones only expired by clock
    redeemable_only: bool = False


class GetInvitesResponse(BaseModel):
    """Get invites response."""

    invites: list[InviteRecord]
    total: int


class GetInvitesUseCase:
    """Use case for listing the invites the current user created."""

    def __init__(self, backend: BackendClient) -> None:
        self.backend = backend

    async def execute(self, request: GetInvitesRequest) -> GetInvitesResponse:
        """List invites, newest first.

        Raises:
            InviteListError: If the backend refused or answered nonsense
            SessionExpiredError: If the session is no longer valid
        """
        try:
            result = await self.backend.list_invites()
        except BackendError as e:
            logfire.warn("Invite listing refused", status_code=e.status_code)
            raise InviteListError(e.detail or str(InviteListError())) from e
        except MalformedResponseError as e:
            raise InviteListError() from e

        now = datetime.now(timezone.utc)
        invites = result.invites
        if request.status is not None:
            invites = [i for i in invites if i.status == request.status]
        if request.redeemable_only:
            invites = [i for i in invites if not i.is_terminal(now)]

        invites = sorted(invites, key=lambda i: i.created_at, reverse=True)
        return GetInvitesResponse(invites=invites, total=len(invites))


class GetInviteRequest(BaseModel):
    """Get invite request."""

    invite_id: str


class GetInviteUseCase:
    """Use case for fetching one of the current user's invites."""

    def __init__(self, backend: BackendClient) -> None:
        self.backend = backend

    async def execute(self, request: GetInviteRequest) -> InviteRecord:
        """Fetch the invite.

        Raises:
            InviteNotFoundError: If the backend does not know the id
            InviteListError: If the backend refused or answered nonsense
        """
        try:
            return await self.backend.get_invite(InviteId(request.invite_id))
        except BackendError as e:
            if e.status_code == 404:
                raise InviteNotFoundError() from e
            logfire.warn("Invite lookup refused", status_code=e.status_code)
            raise InviteListError(e.detail or "Failed to load invite") from e
        except MalformedResponseError as e:
            raise InviteListError("Failed to load invite") from e
