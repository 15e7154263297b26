"""Domain layer errors.

Invite validation and acceptance errors are turned into page state and
never escape a page. OAuth callback errors are terminal for the page load
that raised them. SessionExpiredError is handled globally: the session is
cleared and the user is sent to the login page.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class InvalidInviteError(DomainError):
    """Token unknown, malformed, of the wrong type, or rejected by the backend."""

    def __init__(self, message: str = "Invalid invite link"):
        super().__init__(message)


class ExpiredInviteError(DomainError):
    """The backend (or the invite's own expiry time) says the invite expired."""

    def __init__(self, message: str = "Invite link has expired"):
        super().__init__(message)


class AcceptanceFailureError(DomainError):
    """Accepting an invite failed; a fresh attempt is allowed."""

    def __init__(self, message: str = "Failed to accept invite"):
        super().__init__(message)


class InviteCreationError(DomainError):
    """The backend refused to create an invite link."""

    def __init__(self, message: str = "Failed to create invite link"):
        super().__init__(message)


class InviteNotFoundError(DomainError):
    """No invite with that id belongs to the current user."""

    def __init__(self, message: str = "Invite not found"):
        super().__init__(message)


class InviteListError(DomainError):
    """The current user's invites could not be loaded."""

    def __init__(self, message: str = "Failed to load invites"):
        super().__init__(message)


class InviteRevocationError(DomainError):
    """The backend refused to delete an invite."""

    def __init__(self, message: str = "Failed to delete invite"):
        super().__init__(message)


class OAuthProviderError(DomainError):
    """The identity provider redirected back without a usable code."""

    def __init__(self, error_code: str | None = None, message: str | None = None):
        self.error_code = error_code
        super().__init__(message or f"OAuth error: {error_code}")


class ExchangeFailureError(DomainError):
    """The backend rejected an authorization code exchange."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ConnectionStartError(DomainError):
    """The authorization URL for a mailbox connection could not be obtained."""

    def __init__(
        self, message: str = "Failed to start email account connection process"
    ):
        super().__init__(message)


class AuthenticationError(DomainError):
    """The main login flow could not be started."""

    def __init__(self, message: str = "Failed to start login"):
        super().__init__(message)


class SessionExpiredError(DomainError):
    """An authenticated call returned 401."""

    def __init__(self, message: str = "Your session has expired. Please log in again."):
        super().__init__(message)
