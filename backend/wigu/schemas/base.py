"""Base model for immutable value records.

Every record exposes camelCase JSON field names (the export projection
consumed by report rendering) while Python code uses snake_case.
Records are frozen: updates go through ``model_copy(update=...)``.

Timestamps without an offset are read as UTC, so records written by
clients that emit naive ISO strings compare cleanly with aware times.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Frozen pydantic model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    @field_validator("*")
    @classmethod
    def assume_utc_for_naive_datetimes(cls, v: Any) -> Any:
        """Attach UTC to naive datetimes; other values pass through."""
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v
