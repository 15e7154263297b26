"""Backend REST adapter."""

from .client import BackendClient, HttpBackendClient
from .mock import MockBackendClient

__all__ = ["BackendClient", "HttpBackendClient", "MockBackendClient"]
