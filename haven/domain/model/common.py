"""Shared base for Haven entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable entity base.

    Entities are never mutated in place; services derive the next state
    with model_copy(update=...) and hand it to a repository.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
