"""Repository interfaces."""

from invoicer.domain.repository.storage import BrowserStorage, SessionStore

__all__ = [
    "BrowserStorage",
    "SessionStore",
]
