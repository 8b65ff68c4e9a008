from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class OperationType(str, Enum):
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


class Operation(BaseModel):
    """Represents an operation on a harvested record."""

    type: OperationType
    record_id: str
    record: dict[str, Any] | None = None


class HarvestResult(BaseModel):
    records: list[dict[str, Any]] = []
    operations: list[Operation] = []
    state: dict[str, Any] = Field(
        default_factory=dict, description="State to pass to the next run"
    )
    stop_reason: str | None = None
    skipped: int = Field(default=0, description="Records dropped for lacking an id")
