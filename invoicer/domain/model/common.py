"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Snapshots received from the backend are immutable on the client; a
    fresh snapshot replaces an old one rather than mutating it. Unknown
    fields sent by the backend are ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )
