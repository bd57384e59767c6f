from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from .._http import AsyncTransport, BlockingTransport, HTTPConfig, iter_coroutine
from ._core import Clock, UploadOpsClient
from .config import GatewayConfig, resolve_config
from .errors import ClientClosedError
from .messages import Translate
from .request import MimeLookup, lookup_content_type
from .retrieval import build_retrieval_url
from .types import UploadBatchResult, UploadItem, UploadResult


class _BaseUploaderClient:
    def __init__(
        self,
        config: GatewayConfig | Mapping[str, Any] | None = None,
        *,
        translate: Translate | None = None,
        mime_lookup: MimeLookup = lookup_content_type,
        clock: Clock = time.time,
        timeout: float | None = None,
    ) -> None:
        self._config = resolve_config(config)
        self._translate = translate
        self._mime_lookup = mime_lookup
        self._clock = clock
        self._http_config = HTTPConfig(timeout=timeout) if timeout is not None else HTTPConfig()
        self._closed = False

    @property
    def config(self) -> GatewayConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError()

    def _make_ops(self, transport: BlockingTransport | AsyncTransport) -> UploadOpsClient:
        return UploadOpsClient(
            transport=transport,
            translate=self._translate,
            mime_lookup=self._mime_lookup,
            clock=self._clock,
        )

    def retrieval_url(self, item_path: str) -> str:
        self._ensure_open()
        return build_retrieval_url(self._config, item_path, now=self._clock())


class UploaderClient(_BaseUploaderClient):
    """Blocking client bound to one gateway configuration."""

    def __init__(
        self,
        config: GatewayConfig | Mapping[str, Any] | None = None,
        *,
        client: httpx.Client | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(config, **kwargs)
        self._transport = BlockingTransport(self._http_config, client=client)
        self._ops = self._make_ops(self._transport)

    def upload_all(self, items: Iterable[UploadItem]) -> UploadBatchResult:
        self._ensure_open()
        return iter_coroutine(self._ops.upload_all(self._config, items))

    def upload(self, item: UploadItem) -> UploadResult:
        """Upload a single item, raising on every kind of failure."""
        self._ensure_open()
        return iter_coroutine(self._ops.upload_item(self._config, item))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._transport.close()

    def __enter__(self) -> UploaderClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class AsyncUploaderClient(_BaseUploaderClient):
    """Asyncio client bound to one gateway configuration."""

    def __init__(
        self,
        config: GatewayConfig | Mapping[str, Any] | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(config, **kwargs)
        self._transport = AsyncTransport(self._http_config, client=client)
        self._ops = self._make_ops(self._transport)

    async def upload_all(self, items: Iterable[UploadItem]) -> UploadBatchResult:
        self._ensure_open()
        return await self._ops.upload_all(self._config, items)

    async def upload(self, item: UploadItem) -> UploadResult:
        self._ensure_open()
        return await self._ops.upload_item(self._config, item)

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._transport.aclose()

    async def __aenter__(self) -> AsyncUploaderClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()


__all__ = ["UploaderClient", "AsyncUploaderClient"]
