"""Adapter layer errors."""

from typing import Any


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class BackendError(ProviderError):
    """The backend answered with a non-2xx status.

    Attributes:
        status_code: HTTP status, or None when no response arrived
        detail: The backend's human-readable ``detail``, if it sent one
        body: Decoded JSON body, if any
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
        self.body = body

    @property
    def reason(self) -> str | None:
        """Machine-readable ``reason`` from the body (e.g. ``expired``)."""
        if isinstance(self.body, dict):
            reason = self.body.get("reason")
            if isinstance(reason, str):
                return reason
            detail = self.body.get("detail")
            if isinstance(detail, dict) and isinstance(detail.get("reason"), str):
                return detail["reason"]
        return None


class BackendUnavailableError(BackendError):
    """No response: connection refused, timeout, TLS failure."""

    pass


class MalformedResponseError(AdapterError):
    """A 2xx response whose body does not match the expected schema."""

    pass
