"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict, Field


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )


class VersionedModel(DomainModel):
    """Domain model persisted with optimistic concurrency control.

    ``version`` is the value the entity had when it was read. Repositories
    only write an entity whose version still matches the stored one and
    return the saved copy with the incremented version. New entities start
    at 0.
    """

    version: int = Field(default=0, ge=0)
