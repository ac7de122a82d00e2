"""High-level API surface."""

from .client import CaspioClient
from .copy import copy_record, prepare_copy, validate_overrides, writable_fields
from .records import RecordsAPI, TablesAPI, ViewsAPI

__all__ = [
    "CaspioClient",
    "RecordsAPI",
    "TablesAPI",
    "ViewsAPI",
    "copy_record",
    "prepare_copy",
    "validate_overrides",
    "writable_fields",
]
