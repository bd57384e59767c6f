from .client import AsyncUploaderClient
from .errors import (
    AuthFailedError,
    ClientClosedError,
    ConfigMissingError,
    InvalidConfigError,
    InvalidPayloadError,
    ServerError,
    TokenIssuanceError,
    UploaderError,
)
from .ops import build_retrieval_url, upload_all_async as upload_all
from .types import UploadBatchResult, UploadItem, UploadResult

__all__ = [
    # errors
    "UploaderError",
    "ConfigMissingError",
    "InvalidConfigError",
    "TokenIssuanceError",
    "InvalidPayloadError",
    "AuthFailedError",
    "ServerError",
    "ClientClosedError",
    # ops
    "upload_all",
    "build_retrieval_url",
    # client
    "AsyncUploaderClient",
    # types
    "UploadItem",
    "UploadResult",
    "UploadBatchResult",
]
