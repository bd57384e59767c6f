"""HTTP transport implementations for sync and async clients."""

from __future__ import annotations

import abc
from dataclasses import dataclass

import httpx

from .clients import create_headers_async_client, create_headers_client
from .config import HTTPConfig


@dataclass(frozen=True, slots=True)
class FilePart:
    """One file field of a multipart/form-data body."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    def as_httpx(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)


class BaseTransport(abc.ABC):
    """Abstract base class for HTTP transports."""

    def __init__(self, config: HTTPConfig | None = None) -> None:
        self._config = config or HTTPConfig()

    @property
    def config(self) -> HTTPConfig:
        return self._config

    def _effective_timeout(self, timeout: float | None) -> float:
        return timeout if timeout is not None else self._config.timeout

    @staticmethod
    def _files(files: dict[str, FilePart] | None) -> dict[str, tuple[str, bytes, str]] | None:
        if not files:
            return None
        return {name: part.as_httpx() for name, part in files.items()}

    @abc.abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        files: dict[str, FilePart] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send an HTTP request and return the response.

        Network failures surface as ``httpx.HTTPError`` subclasses.
        """
        ...


class BlockingTransport(BaseTransport):
    """
    Synchronous HTTP transport using httpx.Client.

    ``send`` is declared async but never awaits, so it can be driven
    by iter_coroutine().
    """

    def __init__(
        self,
        config: HTTPConfig | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(config)
        self._owns_client = client is None
        self._client: httpx.Client | None = None
        if client is not None:
            self._client = create_headers_client(self._config.default_headers, client=client)

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = create_headers_client(
                self._config.default_headers, timeout=self._config.timeout
            )
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        files: dict[str, FilePart] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send a synchronous HTTP request (wrapped as async for iter_coroutine)."""
        return self._get_client().request(
            method,
            url,
            headers=headers,
            files=self._files(files),
            timeout=httpx.Timeout(self._effective_timeout(timeout)),
        )

    def close(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
        self._client = None


class AsyncTransport(BaseTransport):
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(
        self,
        config: HTTPConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(config)
        self._owns_client = client is None
        self._client: httpx.AsyncClient | None = None
        if client is not None:
            self._client = create_headers_async_client(
                self._config.default_headers, client=client
            )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = create_headers_async_client(
                self._config.default_headers, timeout=self._config.timeout
            )
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        files: dict[str, FilePart] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send an asynchronous HTTP request."""
        return await self._get_client().request(
            method,
            url,
            headers=headers,
            files=self._files(files),
            timeout=httpx.Timeout(self._effective_timeout(timeout)),
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None


__all__ = [
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "FilePart",
]
