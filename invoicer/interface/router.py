"""Client route table."""

import re
from urllib.parse import unquote

from pydantic import BaseModel

from invoicer.interface.error import RouteNotFoundError


class RouteMatch(BaseModel):
    """A resolved client path."""

    name: str
    params: dict[str, str] = {}


class Router:
    """Maps client paths to page names, first match wins."""

    def __init__(self) -> None:
        self._routes: list[tuple[re.Pattern[str], str]] = []

    def add(self, pattern: str, name: str) -> None:
        """Register a path pattern such as ``/invite/{token}``."""
        regex = re.sub(r"\{(\w+)\}", r"(?P<\1>[^/]+)", pattern)
        self._routes.append((re.compile(f"^{regex}/?$"), name))

    def resolve(self, path: str) -> RouteMatch:
        """Find the page for a path.

        Raises:
            RouteNotFoundError: If no pattern matches
        """
        for regex, name in self._routes:
            match = regex.match(path)
            if match:
                params = {k: unquote(v) for k, v in match.groupdict().items()}
                return RouteMatch(name=name, params=params)
        raise RouteNotFoundError(path)


def build_router() -> Router:
    router = Router()
    router.add("/login", "login")
    router.add("/auth/callback", "auth_callback")
    router.add("/email-accounts/callback", "email_account_callback")
    router.add("/email-accounts/callback-public", "email_account_callback_public")
    # More specific than /invite/{token}, so registered first
    router.add("/invite/add-email/{token}", "add_email_invite")
    router.add("/invite/{token}", "invite_accept")
    router.add("/invite-success", "invite_success")
    return router
