"""Mock providers for testing."""

from .backend import MockBackendProvider
from .browser import MockBrowserProvider
from .container import build_test_container

__all__ = [
    "MockBackendProvider",
    "MockBrowserProvider",
    "build_test_container",
]
