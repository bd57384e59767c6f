from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .._http import AsyncTransport, BlockingTransport, HTTPConfig, iter_coroutine
from ._core import UploadOpsClient
from .config import GatewayConfig, resolve_config
from .messages import Translate
from .retrieval import build_retrieval_url as _build_retrieval_url
from .types import UploadBatchResult, UploadItem

ConfigInput = GatewayConfig | Mapping[str, Any] | None


def upload_all(
    config: ConfigInput,
    items: Iterable[UploadItem],
    *,
    timeout: float | None = None,
    translate: Translate | None = None,
) -> UploadBatchResult:
    """Upload ``items`` in order, mutating each uploaded item in place.

    Returns a failed result when a token cannot be signed; raises
    AuthFailedError or ServerError when the gateway rejects an item.
    """
    transport = BlockingTransport(HTTPConfig(timeout=timeout) if timeout is not None else None)
    try:
        ops = UploadOpsClient(transport=transport, translate=translate)
        return iter_coroutine(ops.upload_all(config, items))
    finally:
        transport.close()


async def upload_all_async(
    config: ConfigInput,
    items: Iterable[UploadItem],
    *,
    timeout: float | None = None,
    translate: Translate | None = None,
) -> UploadBatchResult:
    transport = AsyncTransport(HTTPConfig(timeout=timeout) if timeout is not None else None)
    try:
        ops = UploadOpsClient(transport=transport, translate=translate)
        return await ops.upload_all(config, items)
    finally:
        await transport.aclose()


def build_retrieval_url(config: ConfigInput, item_path: str) -> str:
    return _build_retrieval_url(resolve_config(config), item_path)


__all__ = ["upload_all", "upload_all_async", "build_retrieval_url"]
