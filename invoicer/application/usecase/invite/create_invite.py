"""Create invite use case."""

import logfire
from pydantic import BaseModel, Field, ValidationError, model_validator

from invoicer.adapter.backend import BackendClient
from invoicer.adapter.error import BackendError, MalformedResponseError
from invoicer.application.usecase.base import BaseUseCase
from invoicer.config import UISettings
from invoicer.domain.error import InviteCreationError
from invoicer.domain.model import InviteRecord
from invoicer.domain.value import EmailAccountId, EmailAddress, InviteType


class CreateInviteRequest(BaseModel):
    """Request to create one invite link.

    share_access invites name the connected mailbox being shared;
    add_email_account invites name the address expected to connect.
    """

    invite_type: InviteType
    email_account_id: str | None = None
    invited_email: str | None = None
    expires_in_hours: int | None = Field(default=None, ge=1, le=720)

    @model_validator(mode="after")
    def check_target(self) -> "CreateInviteRequest":
        if self.invite_type == InviteType.SHARE_ACCESS and not self.email_account_id:
            raise ValueError("share_access invites need an email_account_id")
        if self.invite_type == InviteType.ADD_EMAIL_ACCOUNT:
            if not self.invited_email:
                raise ValueError("add_email_account invites need an invited_email")
            try:
                self.invited_email = EmailAddress(root=self.invited_email).root
            except ValidationError:
                raise ValueError(f"Invalid email address: {self.invited_email}")
        return self


class CreateInviteResponse(BaseModel):
    """Response after creating an invite."""

    invite: InviteRecord
    invite_url: str


class CreateInviteUseCase(BaseUseCase[CreateInviteRequest, CreateInviteResponse]):
    """Use case for creating an invite link as the logged-in user."""

    def __init__(self, backend: BackendClient, ui_settings: UISettings) -> None:
        """Initialize use case.

        Args:
            backend: Backend client
            ui_settings: Supplies the default invite lifetime
        """
        self.backend = backend
        self.ui_settings = ui_settings

    async def execute(self, request: CreateInviteRequest) -> CreateInviteResponse:
        """Create the invite.

        Args:
            request: Create invite request

        Returns:
            The stored invite and the link to hand out

        Raises:
            InviteCreationError: If the backend refused or answered nonsense
            SessionExpiredError: If the session is no longer valid
        """
        expires_in_hours = request.expires_in_hours or self.ui_settings.invite_expiry_hours

        with logfire.span(
            "create_invite",
            invite_type=request.invite_type.value,
            expires_in_hours=expires_in_hours,
        ):
            try:
                if request.invite_type == InviteType.SHARE_ACCESS:
                    result = await self.backend.create_invite(
                        EmailAccountId(request.email_account_id), expires_in_hours
                    )
                else:
                    result = await self.backend.create_email_account_invite(
                        request.invited_email, expires_in_hours
                    )
            except BackendError as e:
                logfire.warn("Invite creation refused", status_code=e.status_code)
                raise InviteCreationError(e.detail or str(InviteCreationError())) from e
            except MalformedResponseError as e:
                raise InviteCreationError() from e

            if not result.success:
                raise InviteCreationError()

            logfire.info(
                "Invite created",
                invite_id=result.invite_link.id,
                invite_type=result.invite_link.invite_type.value,
                expires_at=result.invite_link.expires_at,
            )
            return CreateInviteResponse(
                invite=result.invite_link, invite_url=result.invite_url
            )
