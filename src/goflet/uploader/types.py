from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, NotRequired, TypedDict

from .errors import TokenIssuanceError

Scope = Literal["upload", "retrieve"]


class Permission(TypedDict):
    path: str
    methods: list[str]
    query: NotRequired[dict[str, str]]


class TokenPayload(TypedDict):
    iss: str
    iat: int
    nbf: int
    permissions: list[Permission]


@dataclass
class UploadItem:
    """An item handed over by the host.

    The orchestrator mutates it in place once the gateway accepted it:
    ``buffer`` and ``base64_image`` are cleared and ``retrieval_url`` is set.
    """

    file_name: str
    buffer: bytes | None = None
    base64_image: str | None = None
    retrieval_url: str | None = None

    @property
    def has_payload(self) -> bool:
        return bool(self.buffer) or bool(self.base64_image)

    @property
    def uploaded(self) -> bool:
        return self.retrieval_url is not None and not self.has_payload


@dataclass(frozen=True, slots=True)
class UploadResult:
    file_name: str
    path: str
    retrieval_url: str


@dataclass(slots=True)
class UploadBatchResult:
    results: list[UploadResult] = field(default_factory=list)
    error: TokenIssuanceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    "Scope",
    "Permission",
    "TokenPayload",
    "UploadItem",
    "UploadResult",
    "UploadBatchResult",
]
