from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from typing import Callable
from urllib.parse import quote

from .._http import USER_AGENT, FilePart
from .config import GatewayConfig
from .paths import join_path

DEFAULT_CONTENT_TYPE = "application/octet-stream"
MULTIPART_FORM_DATA = "multipart/form-data"
FILE_FIELD = "file"

MimeLookup = Callable[[str], str | None]


def lookup_content_type(file_name: str) -> str | None:
    content_type, _ = mimetypes.guess_type(file_name.replace("\\", "/"), strict=False)
    return content_type


@dataclass(frozen=True, slots=True)
class UploadRequest:
    """Everything the transport needs to perform one upload."""

    url: str
    headers: dict[str, str]
    files: dict[str, FilePart]
    method: str = "POST"
    content_type: str = MULTIPART_FORM_DATA
    path: str = field(default="", compare=False)

    @property
    def file(self) -> FilePart:
        return self.files[FILE_FIELD]


def build_upload_request(
    config: GatewayConfig,
    item_path: str,
    token: str,
    payload: bytes,
    file_name: str,
    *,
    mime_lookup: MimeLookup = lookup_content_type,
    user_agent: str = USER_AGENT,
) -> UploadRequest:
    path = join_path(config.base_path, item_path)
    headers = {
        "Host": config.hostname,
        "Authorization": f"Bearer {token}",
        "User-Agent": user_agent,
    }
    part = FilePart(
        filename=file_name,
        content=payload,
        content_type=mime_lookup(file_name) or DEFAULT_CONTENT_TYPE,
    )
    return UploadRequest(
        url=f"{config.endpoint}/file/{quote(path, safe='/')}",
        headers=headers,
        files={FILE_FIELD: part},
        path=path,
    )


__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "MULTIPART_FORM_DATA",
    "FILE_FIELD",
    "MimeLookup",
    "UploadRequest",
    "lookup_content_type",
    "build_upload_request",
]
