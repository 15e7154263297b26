"""Navigation interface."""

from typing import Any

from invoicer.domain.value import Route

from .base import Service


class Navigator(Service):
    """Moves the user between client routes and out to external pages."""

    def navigate(self, route: Route | str, state: dict[str, Any] | None = None) -> None:
        """Navigate to a client route.

        Args:
            route: Target route or path
            state: Navigation state handed to the target page
        """
        raise NotImplementedError

    def redirect(self, url: str) -> None:
        """Leave the client for an external URL (full-context navigation).

        Args:
            url: Absolute URL, typically an identity provider's authorization page
        """
        raise NotImplementedError

    def reload(self) -> None:
        """Reload the current location."""
        raise NotImplementedError
