#!/usr/bin/env python3
"""Open a client link (invite or OAuth callback) against the configured backend.

Usage:
    scripts/open_link.py /invite/add-email/<token>
    scripts/open_link.py "/auth/callback?code=<code>&state=email_account_oauth_public"
"""

import asyncio
import sys

import logfire

from invoicer.adapter.browser import HistoryNavigator
from invoicer.config import Settings
from invoicer.interface.app import create_app
from invoicer.interface.error import RouteNotFoundError
from invoicer.interface.pages.base import Page


def log_page(page: Page) -> None:
    state = getattr(page, "state", None)
    logfire.info(
        "Page loaded",
        page=type(page).__name__,
        state=state.value if state is not None else None,
        headline=page.headline,
    )


async def run(url: str) -> int:
    app = create_app(Settings())
    try:
        navigator = await app.container.get(HistoryNavigator)
        seen = len(navigator.history)
        log_page(await app.open(url))

        # Follow client-side navigation until a page stays put
        while len(navigator.history) > seen:
            seen = len(navigator.history)
            try:
                page = await app.follow()
            except RouteNotFoundError as e:
                logfire.info("Left the pages served here", path=e.path)
                break
            if page is None:
                break
            log_page(page)
        return 0
    finally:
        await app.close()


def main() -> int:
    """Open the link given on the command line and log any failure to Logfire."""
    if len(sys.argv) != 2:
        print(__doc__, file=sys.stderr)
        return 2

    try:
        return asyncio.run(run(sys.argv[1]))
    except Exception as e:
        logfire.error(
            "Opening link failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
