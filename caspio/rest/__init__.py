"""Caspio REST - record access with exhaustive paging and list-field reconciliation."""

from .api import CaspioClient, RecordsAPI, TablesAPI, ViewsAPI, copy_record
from .core import (
    PAGE_CEILING,
    AmbiguousSourceError,
    CaspioError,
    FieldType,
    InvalidFieldError,
    QueryMode,
    ResourceKind,
    TransportError,
    ValidationError,
)
from .core.query import build_query, build_where_clause
from .models import (
    CreateResult,
    DeleteResult,
    FieldDefinition,
    ListFieldDefinition,
    Record,
    UpdateResult,
)
from .runtime import PageExecutor, PagePlanner, PagePolicy, reconcile
from .sinks import JsonArraySink
from .utils import HTTPClient

__all__ = [
    # Client
    "CaspioClient",
    "RecordsAPI",
    "TablesAPI",
    "ViewsAPI",
    "copy_record",
    "HTTPClient",
    # Query building
    "build_query",
    "build_where_clause",
    "QueryMode",
    # Paging
    "PAGE_CEILING",
    "PageExecutor",
    "PagePlanner",
    "PagePolicy",
    "JsonArraySink",
    # List fields
    "reconcile",
    # Models
    "Record",
    "FieldDefinition",
    "ListFieldDefinition",
    "FieldType",
    "ResourceKind",
    "CreateResult",
    "UpdateResult",
    "DeleteResult",
    # Exceptions
    "CaspioError",
    "ValidationError",
    "TransportError",
    "AmbiguousSourceError",
    "InvalidFieldError",
]
