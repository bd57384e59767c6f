from __future__ import annotations

import base64
import binascii
import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import httpx

from .._http import BaseTransport
from .config import GatewayConfig, resolve_config
from .errors import (
    AuthFailedError,
    InvalidPayloadError,
    ServerError,
    TokenIssuanceError,
)
from .messages import Translate, get_translator
from .request import MimeLookup, UploadRequest, build_upload_request, lookup_content_type
from .retrieval import build_retrieval_url
from .tokens import mint_token
from .types import UploadBatchResult, UploadItem, UploadResult
from .utils import debug, describe_error

UPLOAD_CREATED = 201
UPLOAD_AUTH_FAILED = 400

Clock = Callable[[], float]


def decode_payload(item: UploadItem) -> bytes:
    """Raw bytes for ``item``; base64 is only decoded when no buffer is set."""
    if item.buffer:
        return bytes(item.buffer)
    try:
        return base64.b64decode(item.base64_image or "")
    except (binascii.Error, ValueError) as exc:
        raise InvalidPayloadError(
            f"{item.file_name}: base64 payload cannot be decoded", cause=exc
        ) from exc


def extract_error_message(response: httpx.Response) -> str | None:
    """The gateway's ``error`` field, if any. Raises if the body is not JSON."""
    data = response.json()
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict):
        error = error.get("message")
    if not error:
        return None
    return str(error)


def synthetic_auth_failure(message: str) -> httpx.Response:
    return httpx.Response(UPLOAD_AUTH_FAILED, json={"msg": message})


class UploadOpsClient:
    """Runs a batch of uploads against one gateway, one item at a time."""

    def __init__(
        self,
        *,
        transport: BaseTransport,
        translate: Translate | None = None,
        mime_lookup: MimeLookup = lookup_content_type,
        clock: Clock = time.time,
        timeout: float | None = None,
    ) -> None:
        self._transport = transport
        self._translate = translate or get_translator()
        self._mime_lookup = mime_lookup
        self._clock = clock
        self._timeout = timeout

    @property
    def transport(self) -> BaseTransport:
        return self._transport

    async def upload_all(
        self,
        config: GatewayConfig | Mapping[str, Any] | None,
        items: Iterable[UploadItem],
    ) -> UploadBatchResult:
        config = resolve_config(config)
        batch = UploadBatchResult()
        for index, item in enumerate(items):
            if not item.file_name or not item.has_payload:
                debug(f"skipping item #{index}: missing name or payload")
                continue
            try:
                result = await self.upload_item(config, item)
            except TokenIssuanceError as exc:
                debug(f"aborting batch at {item.file_name}: {exc.message}")
                batch.error = exc
                return batch
            batch.results.append(result)
        return batch

    async def upload_item(self, config: GatewayConfig, item: UploadItem) -> UploadResult:
        if not item.file_name or not item.has_payload:
            raise InvalidPayloadError("item needs a file name and a payload")
        payload = decode_payload(item)
        token = mint_token(config, item.file_name, "upload", now=self._clock())
        request = build_upload_request(
            config,
            item.file_name,
            token,
            payload,
            item.file_name,
            mime_lookup=self._mime_lookup,
            user_agent=self._transport.config.user_agent,
        )
        response, cause = await self._send(request)
        self._raise_for_response(response, cause)
        return self._commit(config, item, request)

    async def _send(
        self, request: UploadRequest
    ) -> tuple[httpx.Response, BaseException | None]:
        try:
            response = await self._transport.send(
                request.method,
                request.url,
                headers=request.headers,
                files=request.files,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            debug(f"transport failed for {request.path}", describe_error(exc))
            return synthetic_auth_failure(self._translate("AUTH_FAILED")), exc
        debug(f"gateway answered {response.status_code} for {request.path}")
        return response, None

    def _raise_for_response(
        self, response: httpx.Response, cause: BaseException | None = None
    ) -> None:
        if response.status_code == UPLOAD_CREATED:
            return
        try:
            message = extract_error_message(response)
        except Exception as exc:
            raise ServerError(self._translate("SERVER_ERROR"), cause=exc) from exc
        if response.status_code == UPLOAD_AUTH_FAILED:
            raise AuthFailedError(message or self._translate("AUTH_FAILED"), cause=cause) from cause
        raise ServerError(message or self._translate("SERVER_ERROR"))

    def _commit(
        self, config: GatewayConfig, item: UploadItem, request: UploadRequest
    ) -> UploadResult:
        item.buffer = None
        item.base64_image = None
        item.retrieval_url = build_retrieval_url(config, item.file_name, now=self._clock())
        debug(f"uploaded {request.path}")
        return UploadResult(
            file_name=item.file_name,
            path=request.path,
            retrieval_url=item.retrieval_url,
        )


__all__ = [
    "UPLOAD_CREATED",
    "UPLOAD_AUTH_FAILED",
    "UploadOpsClient",
    "decode_payload",
    "extract_error_message",
    "synthetic_auth_failure",
]
