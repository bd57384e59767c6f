from __future__ import annotations

from urllib.parse import quote, urlencode

from .config import GatewayConfig
from .paths import RETRIEVE_PREFIX, join_path
from .tokens import issue_token

TOKEN_PARAM = "token"


def _set_param(pairs: list[tuple[str, str]], key: str, value: str) -> list[tuple[str, str]]:
    """Replace the first ``key`` in place and drop the rest; append if absent."""
    result: list[tuple[str, str]] = []
    replaced = False
    for name, current in pairs:
        if name != key:
            result.append((name, current))
        elif not replaced:
            result.append((name, value))
            replaced = True
    if not replaced:
        result.append((key, value))
    return result


def build_retrieval_url(
    config: GatewayConfig,
    item_path: str,
    *,
    now: float | None = None,
) -> str:
    """Shareable GET URL for an uploaded item, carrying its own read-only token."""
    path = quote(join_path(config.base_path, item_path), safe="/")
    base = f"{config.endpoint}{RETRIEVE_PREFIX}{path}"
    token = issue_token(config, item_path, "retrieve", now=now)
    query = urlencode(_set_param(config.query_pairs(), TOKEN_PARAM, token))
    return f"{base}?{query}"


__all__ = ["TOKEN_PARAM", "build_retrieval_url"]
