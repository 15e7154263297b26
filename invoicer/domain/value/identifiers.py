"""Strongly typed identifiers for backend entities.

The backend issues string identifiers (document IDs); the client only
passes them back, so they stay plain strings under a NewType.
"""

from typing import NewType

InviteId = NewType("InviteId", str)
UserId = NewType("UserId", str)
EmailAccountId = NewType("EmailAccountId", str)
