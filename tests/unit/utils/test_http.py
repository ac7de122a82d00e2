"""Precise unit tests for HTTPClient.

Tests focus on session management, URL building and error translation.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from caspio.rest.core import TransportError
from caspio.rest.utils import HTTPClient


def _response(status: int = 200, body=None, content_length: int | None = 10) -> AsyncMock:
    response = AsyncMock()
    response.status = status
    response.reason = "Reason"
    response.content_length = content_length
    response.json = AsyncMock(return_value=body)
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


def _client_with(response, base_url: str = "https://c1abc123.caspio.com/rest") -> HTTPClient:
    client = HTTPClient(base_url=base_url)
    mock_session = MagicMock()
    mock_session.closed = False
    mock_session.request = MagicMock(return_value=response)
    client._session = mock_session
    return client


class TestHTTPClientSessionManagement:
    """Test HTTPClient session management."""

    def test_init(self):
        """Test HTTPClient initialization."""
        client = HTTPClient(
            base_url="https://c1abc123.caspio.com/rest/",
            headers={"Authorization": "bearer tok"},
            timeout=10.0,
        )
        assert client.base_url == "https://c1abc123.caspio.com/rest"
        assert client.headers == {"Authorization": "bearer tok"}
        assert client.timeout.total == 10.0
        assert client._session is None

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        """Test session property creates session when needed."""
        client = HTTPClient(headers={"Accept": "application/json"})
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client._session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_session_property_recreates_closed_session(self):
        """Test session property recreates closed session."""
        client = HTTPClient()
        session1 = client.session
        await session1.close()

        session2 = client.session
        assert session1 is not session2
        assert not session2.closed
        await client.close()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        """Test close() can be called multiple times."""
        client = HTTPClient()
        await client.close()
        await client.close()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test HTTPClient as async context manager."""
        async with HTTPClient() as client:
            assert client.session is not None
        assert client._session.closed


class TestHTTPClientURLs:
    """Test URL building."""

    def test_relative_path_joined_to_base(self):
        client = HTTPClient(base_url="https://c1abc123.caspio.com/rest")
        url = client.build_url("/v2/tables/Demo/records?q.select=*&q.limit=1000")
        assert str(url) == (
            "https://c1abc123.caspio.com/rest/v2/tables/Demo/records?q.select=*&q.limit=1000"
        )

    def test_encoded_query_not_requoted(self):
        client = HTTPClient(base_url="https://c1abc123.caspio.com/rest")
        url = client.build_url("/v2/tables/Demo/records?q.where=Name%20%3D%20'Ed'")
        assert str(url).endswith("?q.where=Name%20%3D%20'Ed'")

    def test_absolute_url_untouched(self):
        client = HTTPClient(base_url="https://c1abc123.caspio.com/rest")
        assert str(client.build_url("https://other.example.com/x")) == "https://other.example.com/x"


class TestHTTPClientRequests:
    """Test request dispatch and response handling."""

    @pytest.mark.asyncio
    async def test_get_returns_json(self):
        client = _client_with(_response(body={"Result": [{"Id": 1}]}))
        result = await client.get("/v2/tables/Demo/records?q.select=*")

        assert result == {"Result": [{"Id": 1}]}
        method, url = client._session.request.call_args.args
        assert method == "GET"
        assert str(url) == "https://c1abc123.caspio.com/rest/v2/tables/Demo/records?q.select=*"

    @pytest.mark.asyncio
    async def test_post_sends_json(self):
        client = _client_with(_response(status=201, body={"Result": [{"Id": 7}]}))
        await client.post("/v2/tables/Demo/records?response=rows", json={"Name": "Ed"})

        call = client._session.request.call_args
        assert call.args[0] == "POST"
        assert call.kwargs["json"] == {"Name": "Ed"}

    @pytest.mark.asyncio
    async def test_no_content_returns_none(self):
        response = _response(status=204, content_length=0)
        client = _client_with(response)

        assert await client.delete("/v2/tables/Demo/records?q.where=Id%3D1") is None
        response.json.assert_not_called()

    @pytest.mark.asyncio
    async def test_error_status_carries_upstream_message(self):
        """Test non-2xx responses raise TransportError with status and Message."""
        response = _response(status=404, body={"Message": "Cannot find table 'Nope'"})
        client = _client_with(response)

        with pytest.raises(TransportError) as exc_info:
            await client.get("/v2/tables/Nope/records")

        error = exc_info.value
        assert error.status_code == 404
        assert error.upstream_message == "Cannot find table 'Nope'"
        assert "Cannot find table 'Nope'" in str(error)

    @pytest.mark.asyncio
    async def test_error_status_without_json_body(self):
        response = _response(status=500)
        response.json = AsyncMock(side_effect=ValueError("not json"))
        client = _client_with(response)

        with pytest.raises(TransportError) as exc_info:
            await client.get("/v2/tables/Demo/records")
        assert exc_info.value.status_code == 500
        assert exc_info.value.upstream_message is None

    @pytest.mark.asyncio
    async def test_connection_error_translated(self):
        client = _client_with(None)
        client._session.request = MagicMock(
            side_effect=aiohttp.ClientConnectionError("connection refused")
        )

        with pytest.raises(TransportError, match="connection refused") as exc_info:
            await client.get("/v2/tables/Demo/records")
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)
