"""Query string builder for table and view record requests.

This module turns a selection-criteria mapping into the percent-encoded
``q.<key>=<value>`` query string the records endpoints expect.

Architecture:
    Pure functions with no I/O. Criteria are validated against a fixed
    allow-list, merged over defaults, normalized according to the requested
    QueryMode, range-checked and finally encoded in merge order.

Design Decisions:
    - Defaults merged first, caller overrides second: this fixes the key
      order of the emitted string (``select`` is always first).
    - Caller mappings are copied, never mutated, so building twice from the
      same input yields byte-identical output.
    - Encoding mirrors ``encodeURIComponent``: ``A-Z a-z 0-9 - _ . ! ~ * ' ( )``
      stay literal, everything else is percent-encoded as UTF-8.

See Also:
    - PagePlanner: Injects the bulk-mode ``limit``/``pageNumber``/``pageSize``
    - RecordsAPI: Sends the built string to the records endpoints
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from .config import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE_NUMBER,
    DEFAULT_PAGE_SIZE,
    LIMIT_RANGE,
    MIN_PAGE_NUMBER,
    PAGE_SIZE_RANGE,
)
from .enums import QueryMode
from .exceptions import ValidationError

__all__ = [
    "VALID_QUERY_PARAMETERS",
    "PAGINATION_PARAMETERS",
    "DEFAULT_SELECTION_CRITERIA",
    "build_query",
    "build_where_clause",
    "encode_component",
    "normalize_criteria",
]

VALID_QUERY_PARAMETERS: tuple[str, ...] = (
    "select",
    "where",
    "groupBy",
    "orderBy",
    "limit",
    "pageNumber",
    "pageSize",
)

PAGINATION_PARAMETERS: tuple[str, ...] = ("limit", "pageNumber", "pageSize")

DEFAULT_SELECTION_CRITERIA: dict[str, Any] = {
    "select": "*",
    "limit": DEFAULT_LIMIT,
}

# Characters encodeURIComponent leaves untouched beyond quote()'s own safe set
_COMPONENT_SAFE = "!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a single query component."""
    return quote(value, safe=_COMPONENT_SAFE)


def _format_number(name: str, value: int | float) -> str:
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError(
                f"{value} is not a valid value for the {name} query parameter. "
                "Numeric values must be finite."
            )
        if value.is_integer():
            return str(int(value))
    return str(value)


def _check_range(name: str, value: int | float) -> None:
    if name == "limit":
        low, high = LIMIT_RANGE
        if value < low or value > high:
            raise ValidationError(
                f"{value} is not a valid value for the limit query parameter. "
                f"The limit query parameter accepts values between {low} and {high}, inclusive."
            )
    elif name == "pageNumber":
        if value < MIN_PAGE_NUMBER:
            raise ValidationError(
                f"{value} is not a valid value for the pageNumber query parameter. "
                f"The pageNumber query parameter accepts values greater than or equal to "
                f"{MIN_PAGE_NUMBER}."
            )
    elif name == "pageSize":
        low, high = PAGE_SIZE_RANGE
        if value < low or value > high:
            raise ValidationError(
                f"{value} is not a valid value for the pageSize query parameter. "
                f"The pageSize query parameter accepts values between {low} and {high}, inclusive."
            )


def _reject_unknown_keys(criteria: Mapping[str, Any]) -> None:
    invalid = [key for key in criteria if key not in VALID_QUERY_PARAMETERS]
    if invalid:
        raise ValidationError(
            f"A query parameter you entered is invalid: {', '.join(map(str, invalid))}. "
            f"Please enter a valid query parameter: {', '.join(VALID_QUERY_PARAMETERS)}"
        )


def normalize_criteria(
    criteria: Mapping[str, Any] | None,
    mode: QueryMode = QueryMode.PAGINATED,
) -> dict[str, Any]:
    """Validate keys and merge criteria over the defaults.

    Args:
        criteria: Caller selection criteria (not modified)
        mode: Pagination contract the result is meant for

    Returns:
        New dict in emission order

    Raises:
        ValidationError: If a key is not in the allow-list
    """
    criteria = dict(criteria or {})
    _reject_unknown_keys(criteria)

    merged = dict(DEFAULT_SELECTION_CRITERIA)
    merged.update(criteria)

    if mode is QueryMode.PAGINATED:
        has_number = merged.get("pageNumber") is not None
        has_size = merged.get("pageSize") is not None
        if has_number or has_size:
            if not has_size:
                merged["pageSize"] = DEFAULT_PAGE_SIZE
            if not has_number:
                merged["pageNumber"] = DEFAULT_PAGE_NUMBER
            # limit is ignored by the backend once paging is requested
            merged.pop("limit", None)
        else:
            merged.pop("pageNumber", None)
            merged.pop("pageSize", None)
            if merged.get("limit") is None:
                merged["limit"] = DEFAULT_LIMIT

    return merged


def build_query(
    criteria: Mapping[str, Any] | None = None,
    mode: QueryMode = QueryMode.PAGINATED,
) -> str:
    """Build the records query string for a selection criteria mapping.

    Args:
        criteria: Mapping with any of ``select``, ``where``, ``groupBy``,
            ``orderBy``, ``limit``, ``pageNumber`` and ``pageSize``
        mode: ``QueryMode.PAGINATED`` for a single bounded page,
            ``QueryMode.BULK`` for pagination-driver requests

    Returns:
        Query string starting with ``?q.``

    Raises:
        ValidationError: On unknown keys, out-of-range numbers or values that
            are neither strings nor numbers

    Example:
        >>> build_query({"where": 'Name = "Ed"'})
        "?q.select=*&q.limit=100&q.where=Name%20%3D%20'Ed'"
    """
    merged = normalize_criteria(criteria, mode)

    parts: list[str] = []
    for name, value in merged.items():
        if isinstance(value, str):
            # the backend only understands single-quoted string literals
            encoded = encode_component(value.replace('"', "'"))
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            _check_range(name, value)
            encoded = encode_component(_format_number(name, value))
        else:
            raise ValidationError(
                "All query parameter values must be either a string or a number. "
                f"The value {value!r} for '{name}' violates this condition."
            )
        parts.append(f"q.{name}={encoded}")

    return "?" + "&".join(parts)


def build_where_clause(where: str) -> str:
    """Normalize quotes in a WHERE clause and percent-encode it.

    Raises:
        ValidationError: If ``where`` is not a string
    """
    if not isinstance(where, str):
        raise ValidationError(
            f"The following WHERE clause provided is invalid: {where!r}. "
            "The WHERE clause must be a string."
        )
    return encode_component(where.replace('"', "'"))
