"""Unit tests for page execution logic."""

from __future__ import annotations

import io
import json
from unittest.mock import MagicMock

import pytest

from caspio.rest.core import TransportError, ValidationError
from caspio.rest.runtime.paging import PageExecutor, PagePolicy, strip_fields
from caspio.rest.sinks import JsonArraySink


def _records(count: int, start: int = 0) -> list[dict]:
    return [{"PK_ID": i, "Name": f"row-{i}"} for i in range(start, start + count)]


def _stub(batch_sizes: list[int]):
    """Build a fetch primitive returning batches of the given sizes, then empty ones."""
    queries: list[str] = []
    offsets = [sum(batch_sizes[:i]) for i in range(len(batch_sizes))]

    async def fetch_page(query: str) -> list[dict]:
        call = len(queries)
        queries.append(query)
        if call < len(batch_sizes):
            return _records(batch_sizes[call], offsets[call])
        return []

    return fetch_page, queries


class TestFetchAll:
    """Accumulate-mode pagination."""

    @pytest.mark.asyncio
    async def test_three_pages(self):
        """Test [1000, 1000, 347] yields 2347 ordered records in 3 requests."""
        fetch_page, queries = _stub([1000, 1000, 347])
        records = await PageExecutor().fetch_all(fetch_page)

        assert len(records) == 2347
        assert [r["PK_ID"] for r in records] == list(range(2347))
        assert len(queries) == 3

    @pytest.mark.asyncio
    async def test_short_first_page_is_single_request(self):
        """Test a first batch of 999 ends pagination immediately."""
        fetch_page, queries = _stub([999])
        records = await PageExecutor().fetch_all(fetch_page)

        assert len(records) == 999
        assert len(queries) == 1

    @pytest.mark.asyncio
    async def test_exact_multiple_stops_on_empty_page(self):
        """Test full pages continue until an empty batch arrives."""
        fetch_page, queries = _stub([1000, 1000])
        records = await PageExecutor().fetch_all(fetch_page)

        assert len(records) == 2000
        assert len(queries) == 3

    @pytest.mark.asyncio
    async def test_empty_collection(self):
        fetch_page, queries = _stub([])
        assert await PageExecutor().fetch_all(fetch_page) == []
        assert len(queries) == 1

    @pytest.mark.asyncio
    async def test_query_strings(self):
        """Test the wire queries for the first and following requests."""
        fetch_page, queries = _stub([1000, 5])
        await PageExecutor().fetch_all(fetch_page, {"where": "Age > 30", "limit": 3})

        assert queries == [
            "?q.select=*&q.limit=1000&q.where=Age%20%3E%2030",
            "?q.select=*&q.limit=1000&q.where=Age%20%3E%2030&q.pageNumber=2&q.pageSize=1000",
        ]

    @pytest.mark.asyncio
    async def test_failure_propagates_without_partial_data(self):
        """Test a failing page aborts the run and returns nothing."""
        calls = 0

        async def fetch_page(query: str) -> list[dict]:
            nonlocal calls
            calls += 1
            if calls == 2:
                raise TransportError("boom", status_code=500)
            return _records(1000)

        with pytest.raises(TransportError, match="boom"):
            await PageExecutor().fetch_all(fetch_page)
        assert calls == 2

    @pytest.mark.asyncio
    async def test_invalid_criteria_never_fetch(self):
        """Test validation happens before the first request."""
        fetch_page, queries = _stub([10])
        with pytest.raises(ValidationError):
            await PageExecutor().fetch_all(fetch_page, {"bogus": 1})
        assert queries == []

    @pytest.mark.asyncio
    async def test_custom_ceiling(self):
        """Test a smaller policy ceiling pages accordingly."""
        fetch_page, queries = _stub([10, 10, 3])
        executor = PageExecutor(PagePolicy(page_ceiling=10))
        records = await executor.fetch_all(fetch_page)

        assert len(records) == 23
        assert len(queries) == 3


class TestValidate:
    """Criteria checks that issue no request."""

    def test_valid_criteria(self):
        PageExecutor().validate({"where": "Age > 30", "pageSize": 5000})

    def test_invalid_criteria(self):
        with pytest.raises(ValidationError, match="bogus"):
            PageExecutor().validate({"bogus": 1})


class TestIterBatches:
    """Lazy batch sequence."""

    @pytest.mark.asyncio
    async def test_batches_are_lazy(self):
        """Test the next request is only issued once the batch is consumed."""
        fetch_page, queries = _stub([1000, 1000, 1])
        batches = PageExecutor().iter_batches(fetch_page)

        first = await batches.__anext__()
        assert len(first) == 1000
        assert len(queries) == 1

        sizes = [len(batch) async for batch in batches]
        assert sizes == [1000, 1]
        assert len(queries) == 3


class TestStreamAll:
    """Stream-mode pagination."""

    @pytest.mark.asyncio
    async def test_streams_valid_array_without_pk_id(self):
        """Test records reach the sink in order with PK_ID removed."""
        fetch_page, _ = _stub([1000, 2])
        buffer = io.BytesIO()
        sink = JsonArraySink(buffer)

        await PageExecutor().stream_all(fetch_page, None, sink)

        records = json.loads(buffer.getvalue())
        assert len(records) == 1002
        assert records[0] == {"Name": "row-0"}
        assert records[-1] == {"Name": "row-1001"}
        assert sink.closed

    @pytest.mark.asyncio
    async def test_sink_closed_once(self):
        fetch_page, _ = _stub([3])
        sink = MagicMock()

        await PageExecutor().stream_all(fetch_page, {}, sink)

        assert sink.write.call_count == 3
        sink.close.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_empty_collection_writes_empty_array(self):
        fetch_page, _ = _stub([])
        buffer = io.BytesIO()
        await PageExecutor().stream_all(fetch_page, None, JsonArraySink(buffer))
        assert buffer.getvalue() == b"[]\n"

    @pytest.mark.asyncio
    async def test_failure_leaves_sink_open(self):
        """Test a failing page propagates and the sink is never closed."""
        calls = 0

        async def fetch_page(query: str) -> list[dict]:
            nonlocal calls
            calls += 1
            if calls == 2:
                raise TransportError("timeout")
            return _records(1000)

        sink = MagicMock()
        with pytest.raises(TransportError):
            await PageExecutor().stream_all(fetch_page, None, sink)

        assert sink.write.call_count == 1000
        sink.close.assert_not_called()


class TestStripFields:
    """Bookkeeping field removal."""

    def test_removes_present_fields_without_mutating(self):
        records = [{"PK_ID": 1, "Name": "a"}, {"PK_ID": 2, "Name": "b"}]
        stripped = strip_fields(records, ("PK_ID",))

        assert stripped == [{"Name": "a"}, {"Name": "b"}]
        assert records[0]["PK_ID"] == 1

    def test_absent_fields_return_input(self):
        records = [{"Name": "a"}]
        assert strip_fields(records, ("PK_ID",)) is records

    def test_empty_batch(self):
        assert strip_fields([], ("PK_ID",)) == []
