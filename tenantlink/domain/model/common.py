"""Base model for invite engine entities and result records."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for domain models.

    Instances never change in place; repositories store a new copy made with
    ``model_copy(update=...)``. That lets the in-memory store journal the
    previous value for rollback.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
