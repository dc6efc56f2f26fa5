"""
Base models for all Pydantic models in the application.
"""
from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable model returned by value from the analytics core."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)


class InputRecord(BaseModel):
    """Read-only view of a record supplied by the calling layer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
