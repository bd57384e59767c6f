"""Shared HTTP infrastructure for gateway clients."""

from .clients import create_headers_async_client, create_headers_client
from .config import DEFAULT_TIMEOUT, USER_AGENT, HTTPConfig
from .iter_coroutine import iter_coroutine
from .transport import AsyncTransport, BaseTransport, BlockingTransport, FilePart

__all__ = [
    "DEFAULT_TIMEOUT",
    "USER_AGENT",
    "HTTPConfig",
    "iter_coroutine",
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "FilePart",
    "create_headers_client",
    "create_headers_async_client",
]
