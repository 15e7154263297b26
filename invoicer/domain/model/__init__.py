"""Domain models."""

from invoicer.domain.model.invite import EmailAccountSummary, InviteDetails, InviteRecord
from invoicer.domain.model.user import User

__all__ = [
    "EmailAccountSummary",
    "InviteDetails",
    "InviteRecord",
    "User",
]
