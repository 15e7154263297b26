"""Navigation implementation."""

from collections.abc import Callable
from typing import Any

import logfire
from pydantic import BaseModel, Field

from invoicer.domain.service.navigation import Navigator
from invoicer.domain.value import Route


class NavigationEntry(BaseModel):
    """One step in the navigation history."""

    location: str
    state: dict[str, Any] = Field(default_factory=dict)
    external: bool = False


class HistoryNavigator(Navigator):
    """Navigator that keeps a history of locations.

    Internal navigations only record the entry; whoever hosts the pages
    reads ``current`` and opens the matching page. External redirects are
    recorded too and handed to ``open_external`` (for instance
    ``webbrowser.open``) when one is configured.
    """

    def __init__(self, open_external: Callable[[str], Any] | None = None) -> None:
        """Initialize navigator.

        Args:
            open_external: Called with the URL on every external redirect
        """
        self.open_external = open_external
        self.history: list[NavigationEntry] = []
        self.reloads = 0

    @property
    def current(self) -> NavigationEntry | None:
        return self.history[-1] if self.history else None

    @property
    def redirects(self) -> list[str]:
        """External URLs redirected to, oldest first."""
        return [entry.location for entry in self.history if entry.external]

    def navigate(self, route: Route | str, state: dict[str, Any] | None = None) -> None:
        location = route.value if isinstance(route, Route) else route
        self.history.append(NavigationEntry(location=location, state=state or {}))
        logfire.info("Navigate", location=location)

    def redirect(self, url: str) -> None:
        self.history.append(NavigationEntry(location=url, external=True))
        # Log only the origin and path, the query carries one-time request data
        logfire.info("Redirect", url=url.split("?", 1)[0])
        if self.open_external is not None:
            self.open_external(url)

    def reload(self) -> None:
        self.reloads += 1
        current = self.current
        if current is not None and not current.external:
            self.history.append(current.model_copy())
