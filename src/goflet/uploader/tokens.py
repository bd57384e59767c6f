"""Scoped token issuance.

Each token carries exactly one permission: POST on ``/file/<path>`` for
uploads, or GET on ``/api/image/<path>`` with the configured query
constraints for retrieval.
"""

from __future__ import annotations

import time
from typing import Any

import jwt

from .config import GatewayConfig
from .errors import TokenIssuanceError, UploaderError
from .paths import retrieve_path, upload_path
from .types import Permission, Scope, TokenPayload
from .utils import debug, describe_error


def build_permission(config: GatewayConfig, item_path: str, scope: Scope) -> Permission:
    if scope == "upload":
        return {"path": upload_path(config.base_path, item_path), "methods": ["POST"]}
    if scope == "retrieve":
        return {
            "path": retrieve_path(config.base_path, item_path),
            "methods": ["GET"],
            "query": config.query_map(),
        }
    raise ValueError(f"unknown token scope: {scope!r}")


def build_token_payload(
    config: GatewayConfig,
    item_path: str,
    scope: Scope,
    *,
    now: float | None = None,
) -> TokenPayload:
    issued_at = int(time.time() if now is None else now)
    return {
        "iss": config.jwt_issuer,
        "iat": issued_at,
        "nbf": issued_at,
        "permissions": [build_permission(config, item_path, scope)],
    }


def _signing_args(config: GatewayConfig) -> tuple[str, Any]:
    if config.jwt_algorithm == "None":
        # unsigned token; PyJWT refuses a key for "none"
        return "none", None
    return config.jwt_algorithm, config.jwt_secret


def mint_token(
    config: GatewayConfig,
    item_path: str,
    scope: Scope,
    *,
    now: float | None = None,
) -> str:
    """Sign a single-permission token, raising TokenIssuanceError on failure."""
    payload = build_token_payload(config, item_path, scope, now=now)
    algorithm, key = _signing_args(config)
    try:
        return jwt.encode(
            dict(payload),
            key,
            algorithm=algorithm,
            headers={"alg": algorithm, "typ": "JWT"},
        )
    except Exception as exc:
        raise TokenIssuanceError(
            f"Failed to sign {scope} token with {config.jwt_algorithm}", cause=exc
        ) from exc


def issue_token(
    config: GatewayConfig,
    item_path: str,
    scope: Scope,
    *,
    now: float | None = None,
) -> str:
    """Like :func:`mint_token`, but returns ``""`` instead of raising."""
    try:
        return mint_token(config, item_path, scope, now=now)
    except TokenIssuanceError as exc:
        debug(exc.message, describe_error(exc.cause) if exc.cause else "")
        return ""


def get_token_payload(token: str) -> dict[str, Any]:
    """Read a token's claims without verifying its signature."""
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as exc:
        raise UploaderError("Invalid token", cause=exc) from exc


__all__ = [
    "build_permission",
    "build_token_payload",
    "mint_token",
    "issue_token",
    "get_token_payload",
]
