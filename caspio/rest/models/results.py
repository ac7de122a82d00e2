"""Write-operation result models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WriteResult(BaseModel):
    """Common response summary for record writes."""

    status: int
    status_text: str = ""
    message: str

    model_config = ConfigDict(frozen=True)


class CreateResult(WriteResult):
    """Result of creating one record.

    ``created_record`` is only populated when the row echo was requested.
    """

    created_record: dict[str, Any] | None = None


class UpdateResult(WriteResult):
    """Result of updating the records matched by a WHERE clause."""

    records_affected: int = Field(0, ge=0)
    updated_records: list[dict[str, Any]] | None = None


class DeleteResult(WriteResult):
    """Result of deleting the records matched by a WHERE clause."""

    records_affected: int = Field(0, ge=0)
