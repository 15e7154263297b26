"""Browser-side adapters: client-local storage and navigation."""

from .navigator import HistoryNavigator, NavigationEntry
from .storage import InMemoryStore, JsonFileStore

__all__ = ["HistoryNavigator", "InMemoryStore", "JsonFileStore", "NavigationEntry"]
