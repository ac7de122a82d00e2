"""Page execution logic for exhausting record collections.

This module provides the PageExecutor class that drives a page-fetch
primitive through the plans produced by PagePlanner, either accumulating the
records in memory or streaming them to a sink.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from time import perf_counter
from typing import TYPE_CHECKING, Any

from ...core.enums import QueryMode
from ...core.query import build_query
from .definitions import FetchPage, PagePolicy, Record
from .planners import PagePlanner
from .telemetry import (
    log_page_completed,
    log_page_error,
    log_page_plan,
    log_pagination_complete,
)

if TYPE_CHECKING:
    from ...sinks.json_array import JsonArraySink


class PageExecutor:
    """Executes page plans sequentially against a fetch primitive.

    Request N+1 is only issued after request N's response has been consumed.
    There is no prefetching and no retrying: the first failure aborts the run.
    """

    def __init__(self, policy: PagePolicy | None = None, resource_id: str = "unknown") -> None:
        """Initialize page executor.

        Args:
            policy: Paging policy for the collection
            resource_id: Table or view identifier used in telemetry
        """
        self._policy = policy or PagePolicy()
        self._planner = PagePlanner(self._policy)
        self._resource_id = resource_id

    @property
    def policy(self) -> PagePolicy:
        return self._policy

    def validate(self, criteria: Mapping[str, Any] | None = None) -> None:
        """Check criteria without issuing any request.

        Raises:
            ValidationError: If the criteria are invalid
        """
        build_query(self._planner.base_criteria(criteria), QueryMode.BULK)

    async def iter_batches(
        self,
        fetch_page: FetchPage,
        criteria: Mapping[str, Any] | None = None,
    ) -> AsyncIterator[list[Record]]:
        """Yield record batches until the collection is exhausted.

        The sequence is lazy, finite and non-restartable. A first page shorter
        than the page ceiling is the whole result. After that, paging stops on
        the first empty batch or on the first batch shorter than the ceiling.

        Args:
            fetch_page: Async function taking an encoded query string and
                returning the page's records
            criteria: Caller selection criteria; paging keys are ignored

        Yields:
            Non-empty lists of records in backend order

        Raises:
            ValidationError: If the criteria are invalid (before any request)
            TransportError: If a page request fails
        """
        ceiling = self._policy.page_ceiling
        self.validate(criteria)

        for plan in self._planner.plans(criteria):
            query = build_query(plan.criteria, QueryMode.BULK)
            log_page_plan(
                resource_id=self._resource_id,
                page_index=plan.page_index,
                page_number=plan.page_number,
                query=query,
            )

            page_start = perf_counter()
            try:
                batch = await fetch_page(query)
            except Exception as e:
                log_page_error(
                    resource_id=self._resource_id,
                    page_index=plan.page_index,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise
            batch = list(batch or [])

            log_page_completed(
                resource_id=self._resource_id,
                page_index=plan.page_index,
                rows=len(batch),
                latency_ms=(perf_counter() - page_start) * 1000.0,
            )

            if not batch:
                break

            yield batch

            if len(batch) < ceiling:
                break

    async def fetch_all(
        self,
        fetch_page: FetchPage,
        criteria: Mapping[str, Any] | None = None,
    ) -> list[Record]:
        """Fetch every matching record into memory.

        Memory grows with the result set; prefer stream_all for very large
        collections. Never returns partial data: if a page fails the error
        propagates and records gathered so far are discarded.
        """
        records: list[Record] = []
        pages_used = 0
        async for batch in self.iter_batches(fetch_page, criteria):
            pages_used += 1
            records.extend(batch)

        log_pagination_complete(
            resource_id=self._resource_id,
            pages_used=pages_used,
            total_records=len(records),
            mode="accumulate",
        )
        return records

    async def stream_all(
        self,
        fetch_page: FetchPage,
        criteria: Mapping[str, Any] | None,
        sink: JsonArraySink,
    ) -> None:
        """Stream every matching record to ``sink`` and close it.

        Bookkeeping fields named by the policy are removed from each batch
        before writing. The sink is closed once, after the last batch. If a
        page fails the sink is left open and unterminated, and the error
        propagates; records already flushed stay on the destination.
        """
        pages_used = 0
        total = 0
        async for batch in self.iter_batches(fetch_page, criteria):
            pages_used += 1
            for record in strip_fields(batch, self._policy.strip_fields):
                sink.write(record)
            total += len(batch)

        sink.close()
        log_pagination_complete(
            resource_id=self._resource_id,
            pages_used=pages_used,
            total_records=total,
            mode="stream",
        )


def strip_fields(records: list[Record], fields: tuple[str, ...]) -> list[Record]:
    """Return records without the named bookkeeping fields.

    Batches are homogeneous, so the first record decides whether any
    stripping is needed. Records are copied, not modified in place.
    """
    if not records or not fields:
        return records
    present = [name for name in fields if name in records[0]]
    if not present:
        return records
    return [{k: v for k, v in record.items() if k not in present} for record in records]
