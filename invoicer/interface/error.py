"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class RouteNotFoundError(InterfaceError):
    """No page is registered for the requested path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No page for path: {path}")
