"""Validate invite use case."""

import logfire
from pydantic import BaseModel, ValidationError

from invoicer.adapter.backend import BackendClient
from invoicer.adapter.error import BackendError, MalformedResponseError
from invoicer.domain.error import ExpiredInviteError, InvalidInviteError
from invoicer.domain.model import InviteDetails
from invoicer.domain.value import InviteState, InviteToken, InviteType
from invoicer.util.observability import redact

TYPE_MISMATCH_MESSAGES = {
    InviteType.ADD_EMAIL_ACCOUNT: "This is not an email account addition invite link",
    InviteType.SHARE_ACCESS: "This is not an email account sharing invite link",
}


class ValidateInviteRequest(BaseModel):
    """Validate invite request."""

    token: str | None = None
    # Set by pages that only handle one kind of invite
    expected_type: InviteType | None = None


class ValidateInviteResponse(BaseModel):
    """Validate invite response.

    state is never LOADING here; that is the page's state before this
    use case returns.
    """

    state: InviteState
    details: InviteDetails | None = None
    message: str | None = None


class ValidateInviteUseCase:
    """Use case for checking an invite link before any action is offered.

    Makes at most one read-only backend call and never raises for a bad
    invite: every outcome is reported as an InviteState.
    """

    def __init__(self, backend: BackendClient) -> None:
        """Initialize validate invite use case.

        Args:
            backend: Backend client
        """
        self.backend = backend

    async def execute(self, request: ValidateInviteRequest) -> ValidateInviteResponse:
        """Validate an invite token.

        Args:
            request: Validation request with token

        Returns:
            Validation response with the resulting state and invite details
        """
        if not request.token:
            logfire.info("Invite token missing")
            return _invalid()

        try:
            token = InviteToken(root=request.token)
        except ValidationError:
            logfire.info("Invite token malformed", token=redact(request.token))
            return _invalid()

        with logfire.span("validate_invite.execute", token=redact(token.root)):
            try:
                result = await self.backend.validate_invite(token)
            except MalformedResponseError as e:
                logfire.error("Unreadable validation response", error=str(e))
                return ValidateInviteResponse(
                    state=InviteState.ERROR,
                    message="Could not read the invite validation response",
                )
            except BackendError as e:
                if e.reason == "expired":
                    return _expired(e.detail)
                return _invalid(e.detail)

            if not result.valid:
                logfire.info(
                    "Invite rejected by backend",
                    token=redact(token.root),
                    reason=result.reason,
                )
                if result.reason == "expired":
                    return _expired(result.message)
                return _invalid(result.message)

            if result.invite_type is None:
                logfire.error("Valid invite without a type", token=redact(token.root))
                return ValidateInviteResponse(
                    state=InviteState.ERROR,
                    message="Could not read the invite validation response",
                )

            details = InviteDetails(
                invite_type=result.invite_type,
                invited_email=result.invited_email,
                expires_at=result.expires_at,
                email_account=result.email_account,
                inviter_user_id=result.inviter_user_id,
                message=result.message,
            )

            # Type check comes first: a wrong-type link is invalid on this page
            # whatever else is true of it
            if request.expected_type and details.invite_type != request.expected_type:
                logfire.info(
                    "Invite type mismatch",
                    expected=request.expected_type.value,
                    actual=details.invite_type.value,
                )
                return _invalid(TYPE_MISMATCH_MESSAGES[request.expected_type])

            if details.is_expired():
                logfire.info(
                    "Invite past expiry reported as valid",
                    token=redact(token.root),
                    expires_at=details.expires_at,
                )
                return _expired()

            logfire.info(
                "Valid invite found",
                token=redact(token.root),
                invite_type=details.invite_type.value,
            )
            return ValidateInviteResponse(
                state=InviteState.VALID, details=details, message=result.message
            )


def _invalid(message: str | None = None) -> ValidateInviteResponse:
    return ValidateInviteResponse(
        state=InviteState.INVALID, message=message or str(InvalidInviteError())
    )


def _expired(message: str | None = None) -> ValidateInviteResponse:
    return ValidateInviteResponse(
        state=InviteState.EXPIRED, message=message or str(ExpiredInviteError())
    )
