"""CaspioClient facade for record access.

The client is the explicit session value every operation goes through: it
owns the HTTP session and the account's base URL and headers, and exposes
the tables and views record facades.

Architecture:
    CaspioClient builds one HTTPClient and shares it between TablesAPI and
    ViewsAPI. Nothing is stored at module level, so several clients for
    different accounts can coexist.

Design Decisions:
    - Access tokens are taken as given; obtaining and refreshing them is the
      caller's concern.
    - Context manager pattern ensures the HTTP session is closed.

See Also:
    - RecordsAPI: Per-resource record operations
    - copy_record: Record copy workflow
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from ..core.config import (
    ACCESS_TOKEN_ENV,
    ACCOUNT_ID_ENV,
    DEFAULT_TIMEOUT,
    TIMEOUT_ENV,
    get_base_url,
    get_headers,
)
from ..models import Record
from ..runtime.paging import PagePolicy
from ..utils.http import HTTPClient
from .copy import copy_record
from .records import TablesAPI, ViewsAPI


class CaspioClient:
    """High-level client for table and view records.

    Example:
        >>> async with CaspioClient("c1abc123", token) as client:
        ...     users = await client.tables.get_records("Demo_Users", {"where": "Active = 1"})
        ...     await client.views.stream_records_to_file("Active_Users", "users.json")
    """

    def __init__(
        self,
        account_id: str,
        access_token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        policy: PagePolicy | None = None,
        http: HTTPClient | None = None,
    ) -> None:
        """Initialize client.

        Args:
            account_id: Account ID from the web services profile token endpoint
            access_token: Bearer token for the account
            timeout: Total timeout per HTTP request in seconds
            policy: Paging policy shared by tables and views
            http: Pre-built HTTP client (mainly for tests)
        """
        if not access_token:
            raise ValueError("access_token must be a non-empty string")
        self.account_id = account_id
        self._http = http or HTTPClient(
            base_url=get_base_url(account_id),
            headers=get_headers(access_token),
            timeout=timeout,
        )
        self.tables = TablesAPI(self._http, policy)
        self.views = ViewsAPI(self._http, policy)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CaspioClient:
        """Create a client from ``CASPIO_ACCOUNT_ID`` and ``CASPIO_ACCESS_TOKEN``.

        ``CASPIO_TIMEOUT`` optionally overrides the request timeout.

        Raises:
            ValueError: If a required variable is missing
        """
        env = os.environ if environ is None else environ
        account_id = env.get(ACCOUNT_ID_ENV)
        access_token = env.get(ACCESS_TOKEN_ENV)
        if not account_id or not access_token:
            raise ValueError(
                f"{ACCOUNT_ID_ENV} and {ACCESS_TOKEN_ENV} must be set to create a client"
            )
        timeout = float(env.get(TIMEOUT_ENV) or DEFAULT_TIMEOUT)
        return cls(account_id, access_token, timeout=timeout)

    async def copy_record(
        self,
        table_name: str,
        where: str,
        overrides: Mapping[str, Any] | None = None,
    ) -> Record | None:
        """Copy the single record matched by ``where``; see ``copy_record``."""
        return await copy_record(self.tables, table_name, where, overrides)

    async def close(self) -> None:
        """Close the HTTP session."""
        await self._http.close()

    async def __aenter__(self) -> CaspioClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
