"""Wire schemas for the backend's JSON responses.

Every response is validated here, at the boundary; use cases only ever
see these typed models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from invoicer.domain.model import EmailAccountSummary, InviteRecord, User
from invoicer.domain.value import EmailAccountId, InviteType, UserId


class BackendResponse(BaseModel):
    """Base for backend responses; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class ValidateInviteResponse(BackendResponse):
    """GET /api/invites/validate/{token}"""

    valid: bool
    invite_type: Optional[InviteType] = None
    invited_email: Optional[str] = None
    expires_at: Optional[datetime] = None
    email_account: Optional[EmailAccountSummary] = None
    inviter_user_id: Optional[UserId] = None
    reason: Optional[str] = None
    message: Optional[str] = None


class AcceptInviteResponse(BackendResponse):
    """POST /api/invites/accept and /api/invites/accept-public"""

    success: bool
    message: Optional[str] = None
    email_account_id: Optional[EmailAccountId] = None


class CreateInviteResponse(BackendResponse):
    """POST /api/invites/ and /api/invites/email-account"""

    success: bool
    invite_link: InviteRecord
    invite_url: str


class InviteListResponse(BackendResponse):
    """GET /api/invites/"""

    invites: list[InviteRecord]
    total: int


class MessageResponse(BackendResponse):
    """Plain acknowledgement, e.g. DELETE /api/invites/{id}"""

    message: Optional[str] = None


class AuthUrlResponse(BackendResponse):
    """GET /auth/google/login and /api/email-accounts/oauth/{provider}/url[-public]"""

    auth_url: Optional[str] = None
    state: Optional[str] = None


class EmailAccountConnectedResponse(BackendResponse):
    """POST /api/email-accounts/oauth/{provider}/callback[-public]"""

    email: Optional[str] = None
    inviter_user_id: Optional[UserId] = None
    message: Optional[str] = None


class LoginExchangeResponse(BackendResponse):
    """POST /auth/google/exchange"""

    user: User
    access_token: str
