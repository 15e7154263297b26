"""Domain services."""

from .auth_session import AuthSession
from .base import Service
from .correlation import InviteCorrelation
from .navigation import Navigator

__all__ = [
    "AuthSession",
    "InviteCorrelation",
    "Navigator",
    "Service",
]
