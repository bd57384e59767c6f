"""Batch orchestration against an in-memory transport."""

from __future__ import annotations

import base64
from collections.abc import Callable
from unittest.mock import patch

import httpx
import pytest

from goflet._http import BaseTransport, FilePart, HTTPConfig, iter_coroutine
from goflet.uploader import (
    AuthFailedError,
    InvalidPayloadError,
    ServerError,
    TokenIssuanceError,
    UploadItem,
    get_token_payload,
)
from goflet.uploader._core import UploadOpsClient, extract_error_message

Responder = Callable[[str, dict[str, str], dict[str, FilePart]], httpx.Response]


class RecordingTransport(BaseTransport):
    def __init__(self, responder: Responder | None = None) -> None:
        super().__init__(HTTPConfig())
        self.calls: list[dict] = []
        self._responder = responder or (lambda *_: httpx.Response(201))

    async def send(self, method, url, *, headers=None, files=None, timeout=None):
        self.calls.append({"method": method, "url": url, "headers": headers, "files": files})
        return self._responder(url, headers or {}, files or {})


def _run(ops: UploadOpsClient, config, items):
    return iter_coroutine(ops.upload_all(config, items))


class TestUploadAll:
    def test_two_items_uploaded_in_order(self, gateway_config) -> None:
        transport = RecordingTransport()
        items = [UploadItem("a.png", buffer=b"aaa"), UploadItem("b.png", buffer=b"bbb")]

        result = _run(UploadOpsClient(transport=transport), gateway_config, items)

        assert result.ok and bool(result)
        assert [call["url"] for call in transport.calls] == [
            "https://goflet.example.com/file/images/2024/a.png",
            "https://goflet.example.com/file/images/2024/b.png",
        ]
        for item, uploaded in zip(items, result.results):
            assert item.buffer is None
            assert item.base64_image is None
            assert item.uploaded
            assert item.retrieval_url == uploaded.retrieval_url
            expected = f"/api/image/images/2024/{item.file_name}?w=800&q=90&token="
            assert expected in item.retrieval_url
            assert not item.retrieval_url.endswith("token=")

    def test_upload_token_is_post_only(self, gateway_config) -> None:
        transport = RecordingTransport()
        _run(UploadOpsClient(transport=transport), gateway_config, [UploadItem("a.png", b"x")])

        bearer = transport.calls[0]["headers"]["Authorization"].removeprefix("Bearer ")
        assert get_token_payload(bearer)["permissions"] == [
            {"path": "/file/images/2024/a.png", "methods": ["POST"]}
        ]

    def test_base64_payload_is_decoded(self, gateway_config) -> None:
        transport = RecordingTransport()
        encoded = base64.b64encode(b"\x89PNG-data").decode()
        item = UploadItem("a.png", base64_image=encoded)

        _run(UploadOpsClient(transport=transport), gateway_config, [item])

        assert transport.calls[0]["files"]["file"].content == b"\x89PNG-data"
        assert item.base64_image is None

    def test_buffer_is_used_verbatim(self, gateway_config) -> None:
        transport = RecordingTransport()
        item = UploadItem("a.png", buffer=b"raw", base64_image="Zm9v")

        with patch("goflet.uploader._core.base64.b64decode") as b64decode:
            _run(UploadOpsClient(transport=transport), gateway_config, [item])

        b64decode.assert_not_called()
        assert transport.calls[0]["files"]["file"].content == b"raw"

    def test_items_without_name_or_payload_are_skipped(self, gateway_config) -> None:
        transport = RecordingTransport()
        items = [UploadItem("", buffer=b"x"), UploadItem("empty.png"), UploadItem("ok.png", b"x")]

        result = _run(UploadOpsClient(transport=transport), gateway_config, items)

        assert len(transport.calls) == 1
        assert [r.file_name for r in result.results] == ["ok.png"]
        assert items[1].retrieval_url is None

    def test_token_failure_aborts_before_any_transport_call(self, broken_signing_config) -> None:
        transport = RecordingTransport()
        items = [UploadItem("a.png", b"x"), UploadItem("b.png", b"y")]

        result = _run(UploadOpsClient(transport=transport), broken_signing_config, items)

        assert not result
        assert isinstance(result.error, TokenIssuanceError)
        assert result.error.cause is not None
        assert transport.calls == []
        assert items[0].buffer == b"x"

    def test_auth_failure_stops_the_batch(self, gateway_config) -> None:
        def responder(url, headers, files):
            if url.endswith("b.png"):
                return httpx.Response(400, json={"error": "bad signature"})
            return httpx.Response(201)

        transport = RecordingTransport(responder)
        items = [UploadItem(name, b"x") for name in ("a.png", "b.png", "c.png")]

        with pytest.raises(AuthFailedError, match="bad signature"):
            _run(UploadOpsClient(transport=transport), gateway_config, items)

        assert len(transport.calls) == 2
        assert items[0].uploaded
        assert items[1].buffer == b"x" and items[1].retrieval_url is None
        assert items[2].buffer == b"x"

    def test_400_without_error_field_uses_generic_message(self, gateway_config) -> None:
        transport = RecordingTransport(lambda *_: httpx.Response(400, json={"detail": "?"}))
        ops = UploadOpsClient(transport=transport, translate=lambda key: f"[{key}]")

        with pytest.raises(AuthFailedError, match=r"\[AUTH_FAILED\]"):
            _run(ops, gateway_config, [UploadItem("a.png", b"x")])

    def test_other_status_uses_server_error_field(self, gateway_config) -> None:
        transport = RecordingTransport(lambda *_: httpx.Response(403, json={"error": "quota"}))

        with pytest.raises(ServerError, match="quota"):
            _run(UploadOpsClient(transport=transport), gateway_config, [UploadItem("a.png", b"x")])

    def test_unparseable_body_becomes_generic_server_error(self, gateway_config) -> None:
        transport = RecordingTransport(lambda *_: httpx.Response(502, text="<html>bad gateway"))
        ops = UploadOpsClient(transport=transport, translate=lambda key: f"[{key}]")

        with pytest.raises(ServerError) as excinfo:
            _run(ops, gateway_config, [UploadItem("a.png", b"x")])

        assert excinfo.value.message == "[SERVER_ERROR]"
        assert "html" not in str(excinfo.value)
        assert excinfo.value.cause is not None

    def test_unparseable_400_body_is_a_server_error(self, gateway_config) -> None:
        transport = RecordingTransport(lambda *_: httpx.Response(400, text="nope"))

        with pytest.raises(ServerError):
            _run(UploadOpsClient(transport=transport), gateway_config, [UploadItem("a.png", b"x")])

    def test_201_body_is_never_parsed(self, gateway_config) -> None:
        transport = RecordingTransport(lambda *_: httpx.Response(201, text="not json"))
        result = _run(UploadOpsClient(transport=transport), gateway_config, [UploadItem("a", b"x")])
        assert result.ok

    def test_transport_error_maps_to_auth_failure(self, gateway_config) -> None:
        def responder(url, headers, files):
            raise httpx.ConnectError("connection refused")

        ops = UploadOpsClient(transport=RecordingTransport(responder), translate=lambda k: k)

        with pytest.raises(AuthFailedError) as excinfo:
            _run(ops, gateway_config, [UploadItem("a.png", b"x")])

        assert excinfo.value.message == "AUTH_FAILED"
        assert isinstance(excinfo.value.cause, httpx.ConnectError)

    def test_invalid_base64_raises(self, gateway_config) -> None:
        transport = RecordingTransport()
        item = UploadItem("a.png", base64_image="abc")
        with pytest.raises(InvalidPayloadError):
            _run(UploadOpsClient(transport=transport), gateway_config, [item])
        assert transport.calls == []

    def test_mapping_config_is_resolved(self, mock_env_clear) -> None:
        transport = RecordingTransport()
        config = {"endpoint": "https://g.example.com", "jwtSecret": "s" * 32, "path": "p"}
        _run(UploadOpsClient(transport=transport), config, [UploadItem("a.png", b"x")])
        assert transport.calls[0]["url"] == "https://g.example.com/file/p/a.png"

    def test_clock_is_used_for_tokens(self, gateway_config) -> None:
        transport = RecordingTransport()
        ops = UploadOpsClient(transport=transport, clock=lambda: 1_600_000_000.5)
        _run(ops, gateway_config, [UploadItem("a.png", b"x")])
        bearer = transport.calls[0]["headers"]["Authorization"].removeprefix("Bearer ")
        assert get_token_payload(bearer)["iat"] == 1_600_000_000


class TestUploadItem:
    def test_rejects_item_without_payload(self, gateway_config) -> None:
        ops = UploadOpsClient(transport=RecordingTransport())
        with pytest.raises(InvalidPayloadError):
            iter_coroutine(ops.upload_item(gateway_config, UploadItem("a.png")))

    @pytest.mark.asyncio
    async def test_async_single_upload(self, gateway_config) -> None:
        ops = UploadOpsClient(transport=RecordingTransport())
        result = await ops.upload_item(gateway_config, UploadItem("dir\\a.png", b"x"))
        assert result.path == "images/2024/dir/a.png"


class TestExtractErrorMessage:
    def test_string_error(self) -> None:
        assert extract_error_message(httpx.Response(400, json={"error": "x"})) == "x"

    def test_nested_error_message(self) -> None:
        body = {"error": {"code": "forbidden", "message": "no"}}
        assert extract_error_message(httpx.Response(400, json=body)) == "no"

    def test_non_object_body(self) -> None:
        assert extract_error_message(httpx.Response(400, json=["error"])) is None

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(ValueError):
            extract_error_message(httpx.Response(400, text="{"))
