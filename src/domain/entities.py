from typing import Any

from pydantic import BaseModel, ConfigDict

# --- Record types ---
# Records are schema-less; values stay dynamically typed until compared.
Record = dict[str, Any]
Collection = list[Record]
DatabaseState = dict[str, Any]
RecordId = str | int | float


# --- Cascade ---


class RemovableRef(BaseModel):
    """A record whose foreign key no longer points at an existing record."""

    model_config = ConfigDict(frozen=True)

    name: str
    id: RecordId
