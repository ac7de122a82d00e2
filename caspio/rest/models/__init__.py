"""Data models."""

from typing import Any

from .fields import FieldDefinition, ListFieldDefinition
from .results import CreateResult, DeleteResult, UpdateResult, WriteResult

Record = dict[str, Any]

__all__ = [
    "Record",
    "FieldDefinition",
    "ListFieldDefinition",
    "WriteResult",
    "CreateResult",
    "UpdateResult",
    "DeleteResult",
]
