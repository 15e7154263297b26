"""Invite entities.

The backend owns invites and is the only party that changes them. The
client holds read snapshots: the full record (for the inviter's own
invites) and the validation details (for whoever opens an invite link).
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from invoicer.domain.model.common import DomainModel
from invoicer.domain.value import (
    EmailAccountId,
    InviteId,
    InviteStatus,
    InviteToken,
    InviteType,
    UserId,
)
from invoicer.domain.value.common import ValueObject


def _aware(moment: datetime) -> datetime:
    # The backend serialises naive UTC timestamps
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class InviteRecord(DomainModel):
    """Invite as stored by the backend.

    Business rules (enforced by the backend, relied on by the client):
    - Acceptance is at-most-once
    - Once used or past expires_at, an invite never becomes active again
    """

    id: InviteId
    inviter_user_id: UserId
    invite_type: InviteType
    email_account_id: Optional[EmailAccountId] = None
    invited_email: Optional[str] = None
    invite_token: InviteToken
    status: InviteStatus = InviteStatus.ACTIVE
    expires_at: datetime
    used_at: Optional[datetime] = None
    used_by_user_id: Optional[UserId] = None
    added_email_account_id: Optional[EmailAccountId] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def is_expired(self, now: datetime | None = None) -> bool:
        """Expired by status or by clock; both count."""
        now = now or datetime.now(timezone.utc)
        return self.status == InviteStatus.EXPIRED or _aware(self.expires_at) < now

    def is_terminal(self, now: datetime | None = None) -> bool:
        """True once the invite can no longer be redeemed."""
        return self.status == InviteStatus.USED or self.is_expired(now)


class EmailAccountSummary(ValueObject):
    """Mailbox being shared by a share_access invite."""

    id: EmailAccountId
    email: str
    provider: str = "gmail"


class InviteDetails(DomainModel):
    """What a validated invite link tells its holder."""

    invite_type: InviteType
    invited_email: Optional[str] = None
    expires_at: Optional[datetime] = None
    email_account: Optional[EmailAccountSummary] = None
    inviter_user_id: Optional[UserId] = None
    message: Optional[str] = None

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return _aware(self.expires_at) < now
