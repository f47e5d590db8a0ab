"""
Resilient HTTP fetcher for the upstream TLD sources.

This module wraps a plain httpx GET with automatic retry on network failures
and on HTTP 500-511 responses. Any other error status, or running out of
retries, surfaces as a FetchError carrying the URL and HTTP status.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from .config import RetryConfig
from .enums import LogLevel
from .exceptions import FetchError
from .retry_manager import RetryManager
from .run_logger import RunLogger

USER_AGENT = "tld-data"

# httpx raises InvalidURL and StreamError outside its HTTPError hierarchy
HTTPX_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


@dataclass
class FetchResponse:
    """A successfully fetched upstream document."""

    url: str
    status_code: int
    text: str


class Fetcher:
    """
    Async HTTP GET client with bounded retry and exponential backoff.

    Usage:
        async with Fetcher(RetryConfig()) as fetcher:
            response = await fetcher.fetch(url)
    """

    COMPONENT = "Fetcher"

    def __init__(
        self,
        retry_config: Optional[RetryConfig] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[RunLogger] = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            retry_config: Retry schedule; defaults to RetryConfig()
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
            logger: Optional run logger
        """
        self._retry_manager = RetryManager(retry_config or RetryConfig())
        self._timeout = timeout
        self._transport = transport
        self._logger = logger
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "Fetcher":
        """Async context manager entry."""
        self._client = self._create_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
            transport=self._transport,
        )

    def _is_retryable(self, error: Exception) -> bool:
        if isinstance(error, FetchError):
            return self._retry_manager.is_retryable_status(error.status_code)
        # A URL without an http(s) scheme fails the same way on every attempt
        if isinstance(error, httpx.UnsupportedProtocol):
            return False
        return isinstance(error, httpx.TransportError)

    async def _get(self, url: str) -> FetchResponse:
        if self._client is None:
            self._client = self._create_client()

        response = await self._client.get(url)
        if response.is_error:
            raise FetchError(
                url=url,
                status_code=response.status_code,
                message=(
                    f"Fetch for '{url}' failed with "
                    f"'{response.status_code} {response.reason_phrase}'"
                ),
            )
        return FetchResponse(url=url, status_code=response.status_code, text=response.text)

    async def fetch(self, url: str) -> FetchResponse:
        """
        GET a document, retrying transient failures.

        Args:
            url: Absolute URL to fetch

        Returns:
            FetchResponse with the decoded body

        Raises:
            FetchError: On a non-retryable error status, an invalid URL, or once
                retries are exhausted
        """
        self._log(LogLevel.DEBUG, f"Fetching {url}", {"url": url})

        def on_retry(attempt: int, error: Exception, delay: float) -> None:
            self._log(
                LogLevel.WARN,
                f"Retrying {url} in {delay:g}s",
                {"url": url, "attempt": attempt, "error": str(error)},
            )

        result = await self._retry_manager.execute_with_retry(
            lambda: self._get(url),
            is_retryable=self._is_retryable,
            on_retry=on_retry,
        )

        if result.success:
            return result.result

        error = result.last_error
        if isinstance(error, FetchError):
            raise error
        if isinstance(error, HTTPX_ERRORS):
            raise FetchError(
                url=url,
                status_code=0,
                message=f"Fetch for '{url}' failed: {error}",
                details={"attempts": result.attempts, "error_type": type(error).__name__},
            ) from error
        raise error

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, self.COMPONENT, message, data)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
