"""Page base class.

A page is a headless controller: it holds the state a view would render
and exposes the user's actions as methods. The host mounts a page when its
route opens and unmounts it when the user moves on.

An awaited call can resolve after the user has left; updates from it are
dropped once the page is unmounted so they never land on another page.
"""

from typing import Any, ClassVar

import logfire


class Page:
    """Base page with a mounted guard."""

    # Title shown for each state value; pages with states override this
    headlines: ClassVar[dict[str, str]] = {}

    def __init__(self) -> None:
        self.mounted = False

    @property
    def headline(self) -> str | None:
        state = getattr(self, "state", None)
        if state is None:
            return None
        return self.headlines.get(state.value)

    async def mount(self) -> None:
        """Attach the page and run its initial load."""
        self.mounted = True
        await self.load()

    def unmount(self) -> None:
        self.mounted = False

    async def load(self) -> None:
        """Initial work done on mount."""
        pass

    def _update(self, **changes: Any) -> bool:
        """Apply state changes if the page is still mounted.

        Returns:
            False if the page was unmounted and nothing was applied
        """
        if not self.mounted:
            logfire.debug(
                "Dropping update for unmounted page",
                page=type(self).__name__,
                fields=sorted(changes),
            )
            return False
        for name, value in changes.items():
            setattr(self, name, value)
        return True
