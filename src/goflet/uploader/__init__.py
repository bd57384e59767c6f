from .client import AsyncUploaderClient, UploaderClient
from .config import (
    DEFAULT_JWT_ALGORITHM,
    DEFAULT_JWT_ISSUER,
    JWT_ALGORITHMS,
    ConfigField,
    GatewayConfig,
    config_fields,
    resolve_config,
)
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
from .ops import build_retrieval_url, upload_all, upload_all_async
from .paths import canonicalize, join_path
from .request import UploadRequest, build_upload_request
from .tokens import get_token_payload, issue_token, mint_token
from .types import Permission, Scope, TokenPayload, UploadBatchResult, UploadItem, UploadResult

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
    # config
    "GatewayConfig",
    "ConfigField",
    "JWT_ALGORITHMS",
    "DEFAULT_JWT_ALGORITHM",
    "DEFAULT_JWT_ISSUER",
    "resolve_config",
    "config_fields",
    # ops
    "upload_all",
    "upload_all_async",
    "build_retrieval_url",
    # building blocks
    "canonicalize",
    "join_path",
    "issue_token",
    "mint_token",
    "get_token_payload",
    "UploadRequest",
    "build_upload_request",
    # clients
    "UploaderClient",
    "AsyncUploaderClient",
    # types
    "Scope",
    "Permission",
    "TokenPayload",
    "UploadItem",
    "UploadResult",
    "UploadBatchResult",
]
