from __future__ import annotations

import httpx
import pytest
from typing import Any, Dict, Generator, Optional
from unittest.mock import AsyncMock, MagicMock, patch

from julia_version.utils.http import HTTPClient
from julia_version.exceptions import NetworkError, ResourceNotFoundError


def _response(
    status_code: int,
    *,
    headers: Optional[Dict[str, str]] = None,
    text: str = "",
) -> MagicMock:
    """Build a mocked httpx.Response with the given status."""
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.headers = headers or {}
    response.text = text
    if status_code >= 400:
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}",
            request=MagicMock(),
            response=response,
        )
    return response


@pytest.fixture
def no_sleep() -> Generator[AsyncMock, None, None]:
    """Skip backoff delays."""
    with patch("julia_version.utils.http.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


@pytest.fixture
def mock_request() -> Generator[AsyncMock, None, None]:
    """Patch the underlying httpx request method."""
    with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock:
        yield mock


@pytest.mark.unit
class TestHTTPClientInit:
    """Tests for HTTPClient initialization and configuration."""

    def test_default_values(self) -> None:
        """Test defaults match the catalogue download policy."""
        client = HTTPClient()

        assert client.timeout == 30
        assert client.max_retries == 5
        assert client.attempts == 6
        assert client.verify_ssl is True
        assert client.user_agent.startswith("julia-version/")
        assert client._client is None

    def test_custom_values(self) -> None:
        client = HTTPClient(timeout=10, max_retries=0, verify_ssl=False, user_agent="Agent/1.0")

        assert client.timeout == 10
        assert client.attempts == 1
        assert client.verify_ssl is False
        assert client.user_agent == "Agent/1.0"


@pytest.mark.unit
class TestHTTPClientLifecycle:
    """Tests for the async context manager protocol."""

    @pytest.mark.asyncio
    async def test_context_manager_creates_and_closes_client(self) -> None:
        client = HTTPClient()
        async with client:
            assert isinstance(client._client, httpx.AsyncClient)

        assert client._client is None

    @pytest.mark.asyncio
    async def test_close_when_no_client(self) -> None:
        """Test close is a no-op before the client is created."""
        client = HTTPClient()
        await client.close()

        assert client._client is None


@pytest.mark.unit
class TestHTTPClientRequestWithRetry:
    """Tests for HTTPClient._request_with_retry retry logic."""

    @pytest.mark.asyncio
    async def test_successful_request(self, mock_request: AsyncMock) -> None:
        mock_request.return_value = _response(200)

        async with HTTPClient(max_retries=1) as client:
            response = await client._request_with_retry("GET", "https://example.com")

        assert response.status_code == 200
        assert mock_request.call_count == 1

    @pytest.mark.asyncio
    async def test_strips_quotes_from_url(self, mock_request: AsyncMock) -> None:
        mock_request.return_value = _response(200)

        async with HTTPClient(max_retries=0) as client:
            await client._request_with_retry("GET", " 'https://example.com' ")

        assert mock_request.call_args[0] == ("GET", "https://example.com")

    @pytest.mark.asyncio
    async def test_404_raises_resource_not_found(self, mock_request: AsyncMock) -> None:
        """Test a 404 is reported immediately without retries."""
        mock_request.return_value = _response(404)

        async with HTTPClient(max_retries=3) as client:
            with pytest.raises(ResourceNotFoundError) as exc_info:
                await client._request_with_retry("HEAD", "https://example.com/missing")

        assert exc_info.value.status_code == 404
        assert isinstance(exc_info.value, NetworkError)
        assert mock_request.call_count == 1

    @pytest.mark.asyncio
    async def test_4xx_error_raises_network_error(self, mock_request: AsyncMock) -> None:
        """Test other client errors are not retried."""
        mock_request.return_value = _response(403, text="Forbidden")

        async with HTTPClient(max_retries=3) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client._request_with_retry("GET", "https://example.com")

        assert exc_info.value.status_code == 403
        assert exc_info.value.response_body == "Forbidden"
        assert mock_request.call_count == 1

    @pytest.mark.asyncio
    async def test_429_waits_for_retry_after(
        self, mock_request: AsyncMock, no_sleep: AsyncMock
    ) -> None:
        mock_request.side_effect = [_response(429, headers={"Retry-After": "3"}), _response(200)]

        async with HTTPClient(max_retries=1) as client:
            response = await client._request_with_retry("GET", "https://example.com")

        assert response.status_code == 200
        no_sleep.assert_awaited_once_with(3)

    @pytest.mark.asyncio
    async def test_429_limit_exceeded(self, mock_request: AsyncMock, no_sleep: AsyncMock) -> None:
        mock_request.return_value = _response(429, headers={"Retry-After": "0"})

        client = HTTPClient(max_retries=10)
        client._max_429_retries = 1
        async with client:
            with pytest.raises(NetworkError) as exc_info:
                await client._request_with_retry("GET", "https://example.com")

        assert "Rate limit exceeded" in str(exc_info.value)
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure",
        [
            httpx.TimeoutException("Timeout"),
            httpx.ConnectError("Connection reset by peer"),
            _response(503),
        ],
        ids=["timeout", "network", "5xx"],
    )
    async def test_transient_failures_are_retried(
        self, mock_request: AsyncMock, no_sleep: AsyncMock, failure: Any
    ) -> None:
        mock_request.side_effect = [failure, _response(200)]

        async with HTTPClient(max_retries=1) as client:
            response = await client._request_with_retry("GET", "https://example.com")

        assert response.status_code == 200
        assert mock_request.call_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_all_attempts(
        self, mock_request: AsyncMock, no_sleep: AsyncMock
    ) -> None:
        """Test the request is tried max_retries + 1 times."""
        mock_request.side_effect = httpx.ConnectError("Connection reset by peer")

        async with HTTPClient(max_retries=5) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client._request_with_retry("GET", "https://example.com")

        assert "failed after 6 attempts" in str(exc_info.value)
        assert mock_request.call_count == 6
        assert no_sleep.await_count == 5

    @pytest.mark.asyncio
    async def test_backoff_grows_exponentially(
        self, mock_request: AsyncMock, no_sleep: AsyncMock
    ) -> None:
        mock_request.side_effect = httpx.TimeoutException("Timeout")

        async with HTTPClient(max_retries=3) as client:
            with pytest.raises(NetworkError):
                await client._request_with_retry("GET", "https://example.com")

        delays = [call.args[0] for call in no_sleep.await_args_list]
        assert len(delays) == 3
        for attempt, delay in enumerate(delays):
            assert 2**attempt <= delay <= 2**attempt + 0.3


@pytest.mark.unit
class TestHTTPClientMethods:
    """Tests for the public request helpers."""

    @pytest.mark.asyncio
    async def test_head_uses_head_method(self, mock_request: AsyncMock) -> None:
        mock_request.return_value = _response(200, headers={"content-length": "12"})

        async with HTTPClient() as client:
            response = await client.head("https://example.com/file.tar.gz")

        assert response.headers["content-length"] == "12"
        assert mock_request.call_args[0][0] == "HEAD"

    @pytest.mark.asyncio
    async def test_get_json_success(self) -> None:
        response = _response(200)
        response.json.return_value = {"1.10.8": {"files": []}}

        client = HTTPClient()
        with patch.object(HTTPClient, "get", new_callable=AsyncMock, return_value=response):
            data = await client.get_json("https://example.com/versions.json")

        assert data == {"1.10.8": {"files": []}}

    @pytest.mark.asyncio
    async def test_get_json_invalid_json(self) -> None:
        response = _response(200, text="<html>")
        response.json.side_effect = ValueError("Expecting value")

        client = HTTPClient()
        with patch.object(HTTPClient, "get", new_callable=AsyncMock, return_value=response):
            with pytest.raises(NetworkError) as exc_info:
                await client.get_json("https://example.com/versions.json")

        assert "Invalid JSON" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_get_json_requires_object(self) -> None:
        response = _response(200, text="[]")
        response.json.return_value = []

        client = HTTPClient()
        with patch.object(HTTPClient, "get", new_callable=AsyncMock, return_value=response):
            with pytest.raises(NetworkError) as exc_info:
                await client.get_json("https://example.com/versions.json")

        assert "Expected JSON object" in exc_info.value.message
