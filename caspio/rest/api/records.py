"""Record operations for tables and views.

Architecture:
    RecordsAPI binds one resource kind (tables or views) to an HTTPClient.
    Its fetch_page method is the page-fetch primitive handed to the
    PageExecutor for bulk retrieval; single-page reads go straight through
    the query builder in paginated mode.

See Also:
    - PageExecutor: Drives fetch_page until the collection is exhausted
    - JsonArraySink: Destination framing for stream_records_to_file
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any

from ..core.config import API_VERSION
from ..core.enums import QueryMode, ResourceKind
from ..core.exceptions import TransportError
from ..core.query import build_query, build_where_clause, encode_component
from ..models import CreateResult, DeleteResult, FieldDefinition, Record, UpdateResult
from ..runtime.paging import PageExecutor, PagePolicy
from ..sinks.json_array import Destination, JsonArraySink
from ..utils.http import HTTPClient

logger = logging.getLogger(__name__)


class RecordsAPI:
    """Record reads and writes for one resource kind."""

    def __init__(
        self,
        http: HTTPClient,
        kind: ResourceKind = ResourceKind.TABLES,
        policy: PagePolicy | None = None,
    ) -> None:
        self._http = http
        self.kind = kind
        self._policy = policy or PagePolicy()

    def _collection_path(self, name: str) -> str:
        if not name:
            raise ValueError(f"{self.kind.value} name must be a non-empty string")
        return f"/{API_VERSION}/{self.kind.value}/{encode_component(name)}"

    def _records_path(self, name: str) -> str:
        return f"{self._collection_path(name)}/records"

    def _executor(self, name: str) -> PageExecutor:
        return PageExecutor(self._policy, resource_id=f"{self.kind.value}/{name}")

    async def fetch_page(self, name: str, query: str) -> list[Record]:
        """Fetch one page of records for an already-built query string."""
        data = await self._http.get(f"{self._records_path(name)}{query}")
        if not isinstance(data, dict) or not isinstance(data.get("Result"), list):
            raise TransportError(
                f"Unexpected records response for {self.kind.value} '{name}': missing Result list"
            )
        return data["Result"]

    async def get_records_paginated(
        self, name: str, criteria: Mapping[str, Any] | None = None
    ) -> list[Record]:
        """Return a single bounded page of records.

        ``limit`` defaults to 100. Giving ``pageNumber`` or ``pageSize``
        switches to page mode and defaults the other one (1 and 25).
        """
        query = build_query(criteria, QueryMode.PAGINATED)
        return await self.fetch_page(name, query)

    async def get_records(
        self, name: str, criteria: Mapping[str, Any] | None = None
    ) -> list[Record]:
        """Return every record matching ``criteria``, paging automatically.

        All records are held in memory; use stream_records_to_file for very
        large result sets. ``limit``, ``pageNumber`` and ``pageSize`` are
        ignored.
        """

        async def fetch(query: str) -> list[Record]:
            return await self.fetch_page(name, query)

        return await self._executor(name).fetch_all(fetch, criteria)

    async def iter_batches(
        self, name: str, criteria: Mapping[str, Any] | None = None
    ) -> AsyncIterator[list[Record]]:
        """Yield record batches of at most the page ceiling, in order."""

        async def fetch(query: str) -> list[Record]:
            return await self.fetch_page(name, query)

        async for batch in self._executor(name).iter_batches(fetch, criteria):
            yield batch

    async def stream_records_to_file(
        self,
        name: str,
        destination: Destination | JsonArraySink,
        criteria: Mapping[str, Any] | None = None,
    ) -> None:
        """Stream every matching record to ``destination`` as a JSON array.

        ``PK_ID`` is removed from records that carry it. If a request fails
        midway the destination is left incomplete and unterminated; callers
        should discard it and retry. Invalid criteria raise before a path
        destination is created.
        """
        executor = self._executor(name)
        executor.validate(criteria)
        if isinstance(destination, JsonArraySink):
            sink = destination
        else:
            sink = JsonArraySink.open(destination)

        async def fetch(query: str) -> list[Record]:
            return await self.fetch_page(name, query)

        await executor.stream_all(fetch, criteria, sink)

    async def create_record(
        self, name: str, values: Mapping[str, Any], *, row: bool = False
    ) -> CreateResult:
        """Create one record; with ``row=True`` the created record is echoed back."""
        response = "rows" if row else ""
        data = await self._http.post(
            f"{self._records_path(name)}?response={response}", json=dict(values)
        )
        result = (data or {}).get("Result") if isinstance(data, dict) else None
        return CreateResult(
            status=201,
            status_text="Created",
            message=f"Record successfully created in '{name}' {self.kind.value[:-1]}.",
            created_record=result[0] if result else None,
        )

    async def update_records(
        self,
        name: str,
        where: str,
        values: Mapping[str, Any],
        *,
        rows: bool = False,
    ) -> UpdateResult:
        """Update the records matched by ``where`` with ``values``.

        List-typed fields take lists of definition indices (see
        ``reconcile``). Two upstream quirks apply when every submitted value
        is a list-field value: ``RecordsAffected`` reads 0 even when rows were
        updated, and ``rows=True`` makes the server answer 500. Neither is
        worked around here.
        """
        if values and all(isinstance(v, list) for v in values.values()):
            logger.warning(
                "list_only_update",
                extra={
                    "resource": f"{self.kind.value}/{name}",
                    "rows_requested": rows,
                },
            )
        response = "rows" if rows else ""
        data = await self._http.put(
            f"{self._records_path(name)}?q.where={build_where_clause(where)}&response={response}",
            json=dict(values),
        )
        data = data if isinstance(data, dict) else {}
        affected = int(data.get("RecordsAffected") or 0)
        updated = data.get("Result") or None
        return UpdateResult(
            status=200,
            status_text="OK",
            message=(
                f"{affected} record(s) affected. Triggered actions on '{name}' can "
                "affect records in other tables."
            ),
            records_affected=affected,
            updated_records=updated,
        )

    async def delete_records(self, name: str, where: str) -> DeleteResult:
        """Delete the records matched by ``where``."""
        data = await self._http.delete(
            f"{self._records_path(name)}?q.where={build_where_clause(where)}"
        )
        data = data if isinstance(data, dict) else {}
        affected = int(data.get("RecordsAffected") or 0)
        return DeleteResult(
            status=200,
            status_text="OK",
            message=(
                f"{affected} record(s) in {self.kind.value[:-1]} '{name}' successfully deleted."
            ),
            records_affected=affected,
        )


class TablesAPI(RecordsAPI):
    """Table records plus the table definition endpoint."""

    def __init__(self, http: HTTPClient, policy: PagePolicy | None = None) -> None:
        super().__init__(http, ResourceKind.TABLES, policy)

    async def definition(self, name: str) -> list[FieldDefinition]:
        """Fetch the table's field definitions. Always hits the API."""
        data = await self._http.get(f"{self._collection_path(name)}/fields")
        fields = data.get("Result") if isinstance(data, dict) else None
        if not isinstance(fields, list):
            raise TransportError(
                f"Unexpected definition response for table '{name}': missing Result list"
            )
        return [FieldDefinition.model_validate(field) for field in fields]


class ViewsAPI(RecordsAPI):
    """View records."""

    def __init__(self, http: HTTPClient, policy: PagePolicy | None = None) -> None:
        super().__init__(http, ResourceKind.VIEWS, policy)
