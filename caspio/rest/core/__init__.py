"""Core components."""

from .config import PAGE_CEILING, get_base_url, get_headers
from .enums import (
    LIST_FIELD_TYPES,
    READ_ONLY_FIELD_TYPES,
    FieldType,
    QueryMode,
    ResourceKind,
)
from .exceptions import (
    AmbiguousSourceError,
    CaspioError,
    InvalidFieldError,
    TransportError,
    ValidationError,
)

__all__ = [
    "PAGE_CEILING",
    "get_base_url",
    "get_headers",
    "FieldType",
    "QueryMode",
    "ResourceKind",
    "LIST_FIELD_TYPES",
    "READ_ONLY_FIELD_TYPES",
    "CaspioError",
    "ValidationError",
    "TransportError",
    "AmbiguousSourceError",
    "InvalidFieldError",
]
