"""Scoped upload client for Goflet object-storage gateways."""

from ._version import VERSION
from .uploader import (
    AsyncUploaderClient,
    GatewayConfig,
    UploadBatchResult,
    UploaderClient,
    UploaderError,
    UploadItem,
    UploadResult,
    build_retrieval_url,
    upload_all,
    upload_all_async,
)

__version__ = VERSION

__all__ = [
    "__version__",
    "AsyncUploaderClient",
    "GatewayConfig",
    "UploadBatchResult",
    "UploaderClient",
    "UploaderError",
    "UploadItem",
    "UploadResult",
    "build_retrieval_url",
    "upload_all",
    "upload_all_async",
]
