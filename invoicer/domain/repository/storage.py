"""Client-local key/value storage interface."""

from abc import ABC, abstractmethod


class SessionStore(ABC):
    """Key/value store for client-local state.

    Two instances exist per client: a durable one (survives restarts, holds
    the session identity) and a session-scoped one (lives as long as the
    browsing session, holds the invite correlation token). Nothing else
    reads or writes client-local state.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        pass


class BrowserStorage:
    """The pair of stores a client works with."""

    def __init__(self, local: SessionStore, session: SessionStore) -> None:
        """Initialize browser storage.

        Args:
            local: Durable store (session identity)
            session: Session-scoped store (invite correlation)
        """
        self.local = local
        self.session = session
