"""Table field definition models."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.enums import FieldType


class ListFieldDefinition(BaseModel):
    """Index-to-value map describing the legal values of a list-typed field.

    Indices are positive integers, not necessarily contiguous and not
    necessarily starting at 1. The backend never renumbers them: deleting a
    value removes its index and re-adding the same text restores it.
    """

    entries: dict[int, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("entries")
    @classmethod
    def validate_indices(cls, v: dict[int, Any]) -> dict[int, Any]:
        """Validate every index is a positive integer."""
        for index in v:
            if index < 1:
                raise ValueError(f"list field index must be a positive integer, got {index}")
        return v

    @classmethod
    def from_wire(cls, mapping: Mapping[str, Any] | None) -> ListFieldDefinition:
        """Build from the ``ListField`` mapping returned by the API (string keys)."""
        return cls(entries={int(key): value for key, value in (mapping or {}).items()})

    def items(self) -> Iterator[tuple[int, Any]]:
        return iter(self.entries.items())


class FieldDefinition(BaseModel):
    """One field of a table definition as returned by ``/tables/{name}/fields``."""

    name: str = Field(..., alias="Name", min_length=1)
    type: str = Field(..., alias="Type")
    is_formula: bool = Field(False, alias="IsFormula")
    unique: bool = Field(False, alias="Unique")
    description: str = Field("", alias="Description")
    label: str = Field("", alias="Label")
    display_order: int | None = Field(None, alias="DisplayOrder")
    list_field: dict[str, Any] | None = Field(None, alias="ListField")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    @property
    def field_type(self) -> FieldType | None:
        """Known field type, or None for types this library does not model."""
        try:
            return FieldType(self.type)
        except ValueError:
            return None

    @property
    def is_list(self) -> bool:
        field_type = self.field_type
        return field_type is not None and field_type.is_list

    @property
    def is_temporal_list(self) -> bool:
        return self.field_type is FieldType.LIST_DATE_TIME

    @property
    def is_writable(self) -> bool:
        """Check if a record value for this field can be submitted on create.

        Formula fields, password fields and backend-assigned types cannot.
        """
        if self.is_formula or self.type == FieldType.PASSWORD.value:
            return False
        field_type = self.field_type
        return not (field_type is not None and field_type.is_read_only)

    @property
    def list_definition(self) -> ListFieldDefinition | None:
        if not self.is_list:
            return None
        return ListFieldDefinition.from_wire(self.list_field)
