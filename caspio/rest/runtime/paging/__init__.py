"""Paging layer for exhausting row-capped record collections.

Every list-type endpoint returns at most 1000 rows per request. This package
plans and executes the sequence of requests needed to retrieve a complete
result set.

Architecture:
    The paging layer consists of:
    - definitions.py: Paging metadata structures (PagePolicy, PagePlan)
    - planners.py: Page planning logic (criteria for each request)
    - executors.py: Page execution logic (fetches, accumulates or streams)
    - telemetry.py: Structured logging

Usage:
    Record facades pass their page-fetch primitive to a PageExecutor and get
    back either the full list of records or a fully written sink.
"""

from __future__ import annotations

from .definitions import FetchPage, PagePlan, PagePolicy
from .executors import PageExecutor, strip_fields
from .planners import PagePlanner

__all__ = [
    "FetchPage",
    "PagePolicy",
    "PagePlan",
    "PagePlanner",
    "PageExecutor",
    "strip_fields",
]
