"""
HTTP client utilities for julia-version.

This module provides an asynchronous HTTP client with retry logic and
error normalization, used to download ``versions.json`` and to probe for
nightly artifacts with ``HEAD`` requests.
"""

from __future__ import annotations

import httpx
import random
import asyncio
from typing import Any, Optional, Dict, cast

from julia_version.utils.logger import get_logger
from julia_version.__version__ import __version__
from julia_version.exceptions import NetworkError, ResourceNotFoundError
from julia_version.constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    USER_AGENT_TEMPLATE,
)

logger = get_logger("http")


class HTTPClient:
    """Asynchronous HTTP client with retries and backoff.

    Timeouts, connection errors and 5xx responses are retried with
    exponential backoff. A 404 raises :class:`ResourceNotFoundError`
    immediately; other 4xx responses raise :class:`NetworkError`.

    Args:
        timeout: Request timeout in seconds.
        max_retries: Retry attempts after the first request.
        verify_ssl: Whether to verify SSL certificates.
        user_agent: Custom User-Agent header value.

    Example:
        >>> async with HTTPClient() as client:
        ...     data = await client.get_json(VERSIONS_JSON_URL)
    """

    def __init__(
        self,
        *,
        timeout: int = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None,
    ) -> None:
        self.timeout = timeout
        self.max_retries = max_retries
        self.verify_ssl = verify_ssl
        self.user_agent = user_agent or USER_AGENT_TEMPLATE.format(version=__version__)

        self._client: Optional[httpx.AsyncClient] = None
        self._max_429_retries: int = 5

    async def __aenter__(self) -> "HTTPClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()

    async def _ensure_client(self) -> None:
        """Initialize the underlying httpx client if needed."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                http2=True,
                verify=self.verify_ssl,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
            )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def attempts(self) -> int:
        """Total number of attempts made for a request before giving up."""
        return self.max_retries + 1

    @staticmethod
    def _backoff_delay(attempt: int) -> float:
        """Exponential backoff with a little jitter."""
        return (2**attempt) + random.uniform(0.0, 0.3)

    async def _wait_for_rate_limit(
        self, response: httpx.Response, url: str, count: int
    ) -> None:
        """Sleep for ``Retry-After`` seconds, or give up after too many 429s."""
        if count > self._max_429_retries:
            raise NetworkError(
                f"Rate limit exceeded after {self._max_429_retries} retries",
                url=url,
                status_code=429,
            )

        retry_after = int(response.headers.get("Retry-After", "1"))
        logger.warning(
            "Rate limited (429), retrying after %ds (%d/%d)",
            retry_after,
            count,
            self._max_429_retries,
        )
        await asyncio.sleep(retry_after)

    @staticmethod
    def _raise_for_client_error(response: httpx.Response, url: str) -> None:
        """Raise for 4xx responses; these are never retried."""
        status = response.status_code
        if status == 404:
            raise ResourceNotFoundError(
                f"Resource not found: {url}",
                url=url,
                status_code=404,
            )
        if 400 <= status < 500:
            raise NetworkError(
                f"HTTP {status} error for {url}",
                url=url,
                status_code=status,
                response_body=response.text,
            )

    async def _request_with_retry(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute an HTTP request with retry and backoff logic."""
        await self._ensure_client()
        assert self._client is not None

        clean_url = url.strip().strip("\"'")
        last_exc: Optional[Exception] = None
        retry_429_count = 0

        for attempt in range(self.attempts):
            try:
                response = await self._client.request(method, clean_url, **kwargs)

            except httpx.TimeoutException as exc:
                last_exc = exc
                logger.warning(
                    "Request timeout (%d/%d): %s",
                    attempt + 1,
                    self.attempts,
                    clean_url,
                )

            except httpx.NetworkError as exc:
                last_exc = exc
                logger.warning(
                    "Network error (%d/%d): %s",
                    attempt + 1,
                    self.attempts,
                    exc,
                )

            else:
                if response.status_code == 429:
                    retry_429_count += 1
                    await self._wait_for_rate_limit(response, clean_url, retry_429_count)
                    continue

                if response.status_code < 500:
                    self._raise_for_client_error(response, clean_url)
                    return response

                last_exc = NetworkError(
                    f"HTTP {response.status_code} error for {clean_url}",
                    url=clean_url,
                    status_code=response.status_code,
                )
                logger.warning(
                    "Server error %d (%d/%d): %s",
                    response.status_code,
                    attempt + 1,
                    self.attempts,
                    clean_url,
                )

            if attempt < self.max_retries:
                delay = self._backoff_delay(attempt)
                logger.debug("Retrying in %.2fs", delay)
                await asyncio.sleep(delay)

        raise NetworkError(
            f"Request failed after {self.attempts} attempts: {clean_url}",
            url=clean_url,
        ) from last_exc

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Perform a GET request with retry logic."""
        return await self._request_with_retry("GET", url, **kwargs)

    async def head(self, url: str, **kwargs: Any) -> httpx.Response:
        """Perform a HEAD request with retry logic."""
        return await self._request_with_retry("HEAD", url, **kwargs)

    async def get_json(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        """Fetch a URL and parse the response as a JSON object."""
        response = await self.get(url, **kwargs)

        try:
            data = response.json()
        except Exception as exc:
            raise NetworkError(
                f"Invalid JSON response from {url}",
                url=url,
                response_body=response.text,
            ) from exc

        if not isinstance(data, dict):
            raise NetworkError(
                f"Expected JSON object from {url}",
                url=url,
                response_body=response.text,
            )

        return cast(Dict[str, Any], data)
