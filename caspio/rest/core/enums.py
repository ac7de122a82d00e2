"""Core enumerations shared across the library."""

from __future__ import annotations

from enum import Enum


class QueryMode(str, Enum):
    """Pagination contract a query string is built for.

    ``PAGINATED`` returns a single bounded page and applies the
    ``pageNumber``/``pageSize``/``limit`` defaulting rules. ``BULK`` is used by
    the pagination driver, which manages those keys itself.
    """

    BULK = "bulk"
    PAGINATED = "paginated"


class ResourceKind(str, Enum):
    """Record-bearing resource collections exposed by the REST API."""

    TABLES = "tables"
    VIEWS = "views"


class FieldType(str, Enum):
    """Table field types reported by the table definition endpoint."""

    STRING = "STRING"
    TEXT = "TEXT"
    PASSWORD = "PASSWORD"
    NUMBER = "NUMBER"
    INTEGER = "INTEGER"
    CURRENCY = "CURRENCY"
    DATE_TIME = "DATE/TIME"
    YES_NO = "YES/NO"
    FILE = "FILE"
    AUTONUMBER = "AUTONUMBER"
    PREFIXED_AUTONUMBER = "PREFIXED AUTONUMBER"
    GUID = "GUID"
    RANDOM_ID = "RANDOM ID"
    TIMESTAMP = "TIMESTAMP"
    LIST_STRING = "LIST-STRING"
    LIST_NUMBER = "LIST-NUMBER"
    LIST_DATE_TIME = "LIST-DATE/TIME"

    @property
    def is_list(self) -> bool:
        """Check if values are drawn from an index-addressed list definition."""
        return self in LIST_FIELD_TYPES

    @property
    def is_read_only(self) -> bool:
        """Check if the backend assigns values of this type itself."""
        return self in READ_ONLY_FIELD_TYPES


LIST_FIELD_TYPES = frozenset(
    {FieldType.LIST_STRING, FieldType.LIST_NUMBER, FieldType.LIST_DATE_TIME}
)

READ_ONLY_FIELD_TYPES = frozenset(
    {
        FieldType.AUTONUMBER,
        FieldType.PREFIXED_AUTONUMBER,
        FieldType.GUID,
        FieldType.RANDOM_ID,
        FieldType.TIMESTAMP,
    }
)
