"""HTTP plumbing for adapters that evaluate fetched markup.

Fetch failures are converted into false results here so that subclasses
only deal with the document body.
"""

import logging
from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TypeVar

import httpx

from rotalabs_truth.adapters.base import BaseAdapter
from rotalabs_truth.core.config import AdapterConfig
from rotalabs_truth.core.exceptions import ConfigurationError
from rotalabs_truth.core.result import AdapterResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class HttpAdapterConfig(AdapterConfig):
    """Configuration shared by HTTP-backed adapters.

    Attributes:
        url: Page to fetch.
        timeout: Request timeout in milliseconds.
    """

    url: str
    timeout: int = field(default=DEFAULT_TIMEOUT_MS, kw_only=True)


class FetchError(Exception):
    """Raised by fetch() when the page could not be retrieved."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details = details or {}


H = TypeVar("H", bound=HttpAdapterConfig)


class HttpAdapter(BaseAdapter[H]):
    """Base class for adapters that fetch a page and inspect its body.

    An injected client is borrowed and never closed. Without one, the
    adapter creates its own client on first use and closes it on dispose().

    Attributes:
        _client: HTTP client in use, if any.
        _owns_client: Whether dispose() should close the client.
    """

    config_class = HttpAdapterConfig

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        super().__init__()
        self._client = client
        self._owns_client = client is None

    def _validate(self, config: H) -> None:
        if not config.url:
            raise ConfigurationError(f"{type(self).__name__} requires a url")
        try:
            httpx.URL(config.url)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"Invalid url: {exc}") from exc
        if config.timeout is not None and config.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {config.timeout}")

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True)
            self._owns_client = True
        return self._client

    async def fetch(self, url: str, timeout_ms: Optional[int] = None) -> str:
        """Fetch a page body.

        Args:
            url: Page to fetch.
            timeout_ms: Request timeout in milliseconds.

        Returns:
            Response text.

        Raises:
            FetchError: On transport errors, timeouts, invalid URLs or
                HTTP status >= 400.
        """
        timeout_ms = timeout_ms or DEFAULT_TIMEOUT_MS
        client = self._get_client()

        try:
            response = await client.get(url, timeout=timeout_ms / 1000)
        except httpx.TimeoutException as exc:
            raise FetchError(
                f"Request timed out after {timeout_ms}ms",
                details={"url": url, "exception": str(exc)},
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(
                f"Network error fetching {url}: {exc}",
                details={"url": url, "exception": str(exc)},
            ) from exc
        except httpx.InvalidURL as exc:
            raise FetchError(f"Invalid url: {exc}", details={"exception": str(exc)}) from exc

        if response.status_code >= 400:
            raise FetchError(
                f"HTTP error: status {response.status_code}",
                details={"url": str(response.url), "status_code": response.status_code},
            )

        return response.text

    async def evaluate(self) -> AdapterResult:
        """Fetch the configured page and evaluate its body.

        Returns:
            Result from inspect(), or a false result describing the fetch failure.
        """
        config = self._require_config()

        try:
            markup = await self.fetch(config.url, config.timeout)
        except FetchError as exc:
            logger.warning(f"{type(self).__name__} {config.id}: {exc}")
            return AdapterResult.failure(str(exc))

        return self.inspect(config, markup)

    @abstractmethod
    def inspect(self, config: H, markup: str) -> AdapterResult:
        """Evaluate a fetched document against the configuration."""
        pass

    async def dispose(self) -> None:
        """Close the HTTP client if this adapter created it."""
        client = self._client
        if client is None or not self._owns_client:
            return

        self._client = None
        await client.aclose()
