"""Client factory functions for creating pre-configured httpx clients."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

import httpx

from .config import DEFAULT_TIMEOUT


def _create_static_headers_hook(
    headers: Mapping[str, str],
) -> Callable[[httpx.Request], httpx.Request]:
    """Create a request hook that adds static headers to every request.

    Uses setdefault so per-request headers take precedence.
    """

    def hook(request: httpx.Request) -> httpx.Request:
        for key, value in headers.items():
            request.headers.setdefault(key, value)
        return request

    return hook


def _prepend_request_hooks(
    client: httpx.Client | httpx.AsyncClient,
    hooks: Sequence[Callable[[httpx.Request], object]],
) -> None:
    """Prepend request hooks to an existing client's event hooks.

    Our hooks run first so hooks the caller configured can still
    override or observe the headers we add.
    """
    existing_hooks = list(client.event_hooks.get("request", []))
    client.event_hooks["request"] = list(hooks) + existing_hooks


def create_headers_client(
    headers: Mapping[str, str],
    timeout: float | None = None,
    *,
    client: httpx.Client | None = None,
) -> httpx.Client:
    """Create or configure a sync httpx client with static headers.

    Args:
        headers: Static headers to add to every request.
        timeout: Request timeout in seconds. Defaults to DEFAULT_TIMEOUT.
            Ignored if client is provided.
        client: Optional existing client to configure.

    Returns:
        An httpx.Client with static headers event hook configured.
    """
    headers_hook = _create_static_headers_hook(headers)

    if client is not None:
        _prepend_request_hooks(client, [headers_hook])
        return client

    effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
    return httpx.Client(
        timeout=httpx.Timeout(effective_timeout),
        event_hooks={"request": [headers_hook]},
    )


def create_headers_async_client(
    headers: Mapping[str, str],
    timeout: float | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> httpx.AsyncClient:
    """Create or configure an async httpx client with static headers.

    httpx awaits every hook of an AsyncClient, so the static hook is
    wrapped in a coroutine function here.
    """
    headers_hook = _create_static_headers_hook(headers)

    async def async_headers_hook(request: httpx.Request) -> None:
        headers_hook(request)

    if client is not None:
        _prepend_request_hooks(client, [async_headers_hook])
        return client

    effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
    return httpx.AsyncClient(
        timeout=httpx.Timeout(effective_timeout),
        event_hooks={"request": [async_headers_hook]},
    )


__all__ = [
    "create_headers_client",
    "create_headers_async_client",
]
