"""Value types for the invite lifecycle and the OAuth handoff.

Every string literal that travels between the backend, the identity
provider and the pages is modelled as a closed enumeration here.
"""

import re
from enum import Enum

from pydantic import field_validator

from invoicer.domain.value.common import RootValueObject


class InviteType(str, Enum):
    """Kind of invite; decides which acceptance flow applies."""

    SHARE_ACCESS = "share_access"
    ADD_EMAIL_ACCOUNT = "add_email_account"


class InviteStatus(str, Enum):
    """Backend status of an invite."""

    ACTIVE = "active"
    USED = "used"
    EXPIRED = "expired"


class InviteState(str, Enum):
    """Client-visible state of an invite page."""

    LOADING = "loading"
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"
    ACCEPTING = "accepting"
    SUCCESS = "success"
    ERROR = "error"


class CallbackState(str, Enum):
    """State of an OAuth callback page. SUCCESS and ERROR are terminal."""

    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


class OAuthFlow(str, Enum):
    """Flow discriminator carried through the provider redirect as ``state``.

    An absent ``state`` means the main login flow. Any other value that is
    not listed here is rejected.
    """

    MAIN_LOGIN = "main_login"
    EMAIL_ACCOUNT = "email_account_oauth"
    EMAIL_ACCOUNT_PUBLIC = "email_account_oauth_public"

    @classmethod
    def from_state(cls, state: str | None) -> "OAuthFlow":
        """Resolve the ``state`` query parameter.

        Raises:
            ValueError: If the value is not a known discriminator
        """
        if not state:
            return cls.MAIN_LOGIN
        # MAIN_LOGIN is the default only; it never travels on the wire
        if state in (cls.EMAIL_ACCOUNT.value, cls.EMAIL_ACCOUNT_PUBLIC.value):
            return cls(state)
        raise ValueError(f"Unrecognized OAuth state: {state}")

    @property
    def connects_mailbox(self) -> bool:
        return self is not OAuthFlow.MAIN_LOGIN


class Route(str, Enum):
    """Client routes the pages navigate to."""

    HOME = "/"
    LOGIN = "/login"
    DASHBOARD = "/dashboard"
    EMAIL_ACCOUNTS = "/email-accounts"
    INVITE_SUCCESS = "/invite-success"


class InviteToken(RootValueObject[str]):
    """Opaque, URL-safe invite token.

    Possessing the token is enough to query or redeem the invite it names;
    the client never looks inside it.
    """

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is non-empty and URL-safe."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        if not re.match(r"^[A-Za-z0-9_.~-]+$", v):
            raise ValueError("Token must be URL-safe")
        return v


class EmailAddress(RootValueObject[str]):
    """Email address, only checked for basic shape."""

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate the address has a local part and a domain."""
        v = v.strip()
        if not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", v):
            raise ValueError("Invalid email address")
        return v
