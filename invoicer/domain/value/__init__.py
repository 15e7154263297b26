"""Domain value objects for the Invoicer client."""

from invoicer.domain.value.identifiers import EmailAccountId, InviteId, UserId
from invoicer.domain.value.types import (
    CallbackState,
    EmailAddress,
    InviteState,
    InviteStatus,
    InviteToken,
    InviteType,
    OAuthFlow,
    Route,
)

__all__ = [
    # Identifiers
    "EmailAccountId",
    "InviteId",
    "UserId",
    # Types
    "CallbackState",
    "EmailAddress",
    "InviteState",
    "InviteStatus",
    "InviteToken",
    "InviteType",
    "OAuthFlow",
    "Route",
]
