"""Authenticated user entity."""

from typing import Any, Optional

from pydantic import Field

from invoicer.domain.model.common import DomainModel
from invoicer.domain.value import UserId


class User(DomainModel):
    """Profile of the logged-in user, cached alongside the access token."""

    id: UserId
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
    google_id: Optional[str] = None
    linked_accounts: list[Any] = Field(default_factory=list)
