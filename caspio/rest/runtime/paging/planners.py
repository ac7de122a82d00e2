"""Page planning logic for bulk retrieval.

This module provides the PagePlanner class that turns caller criteria into
the sequence of page requests needed to exhaust a record collection.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from ...core.query import PAGINATION_PARAMETERS
from .definitions import PagePlan, PagePolicy


class PagePlanner:
    """Plans page requests against the backend's page ceiling.

    The first request asks for ``limit=<ceiling>`` with no paging keys. Every
    following request keeps that limit and pins ``pageSize`` to the ceiling,
    advancing ``pageNumber`` from 2. Any caller-supplied ``limit``,
    ``pageNumber`` or ``pageSize`` is discarded.
    """

    def __init__(self, policy: PagePolicy | None = None) -> None:
        """Initialize page planner.

        Args:
            policy: Paging policy for the collection
        """
        self._policy = policy or PagePolicy()

    def base_criteria(self, criteria: Mapping[str, Any] | None) -> dict[str, Any]:
        """Copy criteria without paging keys and with the forced limit."""
        base = {
            key: value
            for key, value in (criteria or {}).items()
            if key not in PAGINATION_PARAMETERS
        }
        base["limit"] = self._policy.page_ceiling
        return base

    def plans(self, criteria: Mapping[str, Any] | None = None) -> Iterator[PagePlan]:
        """Yield page plans lazily; the sequence is unbounded.

        The executor decides when to stop consuming it.
        """
        base = self.base_criteria(criteria)
        yield PagePlan(page_index=0, criteria=dict(base))

        page_number = 2
        while True:
            paged = dict(base)
            paged["pageNumber"] = page_number
            paged["pageSize"] = self._policy.page_ceiling
            yield PagePlan(page_index=page_number - 1, criteria=paged, page_number=page_number)
            page_number += 1
