"""Paging metadata definitions and policy structures.

This module defines the data structures used to describe how record
collections are paged: the policy for a resource and the plan for a single
page request.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from ...core.config import PAGE_CEILING

Record = dict[str, Any]

# Fetches one page given the encoded query string
FetchPage = Callable[[str], Awaitable[list[Record]]]


@dataclass(frozen=True)
class PagePolicy:
    """Paging policy for a record collection.

    Attributes:
        page_ceiling: Maximum number of rows the backend returns per request
        strip_fields: Bookkeeping fields removed from records in stream mode
    """

    page_ceiling: int = PAGE_CEILING
    strip_fields: tuple[str, ...] = ("PK_ID",)

    def __post_init__(self) -> None:
        """Validate policy configuration."""
        if self.page_ceiling < 1:
            raise ValueError("PagePolicy page_ceiling must be positive")


@dataclass(frozen=True)
class PagePlan:
    """Plan for a single page request.

    Attributes:
        page_index: Zero-based index of this request in the overall run
        criteria: Selection criteria to build this request's query string from
        page_number: Backend page number (None for the first, limit-only request)
    """

    page_index: int
    criteria: dict[str, Any] = field(default_factory=dict)
    page_number: int | None = None
