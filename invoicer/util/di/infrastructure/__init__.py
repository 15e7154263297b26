"""Infrastructure providers."""

# Import bases
from .backend import BackendProvider
from .browser import BrowserProvider

# Import implementations (needed for __subclasses__())
from .backend import ProdBackendProvider  # noqa: F401
from .browser import ProdBrowserProvider  # noqa: F401

__all__ = [
    "BackendProvider",
    "BrowserProvider",
    "ProdBackendProvider",
    "ProdBrowserProvider",
]
