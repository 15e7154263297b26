"""Revoke invite use case."""

import logfire
from pydantic import BaseModel

from invoicer.adapter.backend import BackendClient
from invoicer.adapter.error import BackendError, MalformedResponseError
from invoicer.application.usecase.base import BaseUseCase
from invoicer.domain.error import InviteNotFoundError, InviteRevocationError
from invoicer.domain.value import InviteId


class RevokeInviteRequest(BaseModel):
    """Revoke invite request."""

    invite_id: str


class RevokeInviteResponse(BaseModel):
    """Revoke invite response."""

    message: str


class RevokeInviteUseCase(BaseUseCase[RevokeInviteRequest, RevokeInviteResponse]):
    """Use case for deleting an invite so its link stops working."""

    def __init__(self, backend: BackendClient) -> None:
        """Initialize revoke invite use case.

        Args:
            backend: Backend client
        """
        self.backend = backend

    async def execute(self, request: RevokeInviteRequest) -> RevokeInviteResponse:
        """Revoke the invite.

        Raises:
            InviteNotFoundError: If the backend does not know the id
            InviteRevocationError: If the backend refused or answered nonsense
            SessionExpiredError: If the session is no longer valid
        """
        with logfire.span("revoke_invite", invite_id=request.invite_id):
            try:
                result = await self.backend.delete_invite(InviteId(request.invite_id))
            except BackendError as e:
                if e.status_code == 404:
                    raise InviteNotFoundError() from e
                logfire.warn("Invite deletion refused", status_code=e.status_code)
                raise InviteRevocationError(
                    e.detail or str(InviteRevocationError())
                ) from e
            except MalformedResponseError as e:
                raise InviteRevocationError() from e

            logfire.info("Invite revoked", invite_id=request.invite_id)
            return RevokeInviteResponse(message=result.message or "Invite deleted")
