"""Display strings for user-facing uploader messages."""

from __future__ import annotations

import os
from typing import Callable

Translate = Callable[[str], str]

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "GOFLET": "Goflet",
        "GOFLET_JWT_ALGORITHM": "JWT algorithm",
        "GOFLET_JWT_SECRET": "JWT secret",
        "GOFLET_JWT_ISSUER": "JWT issuer",
        "GOFLET_ENDPOINT": "Endpoint",
        "GOFLET_MESSAGE_ENDPOINT": "Ex. https://goflet.example.com",
        "GOFLET_PATH": "Storage path",
        "GOFLET_MESSAGE_PATH": "Ex. images/2024",
        "GOFLET_OPTIONS": "Default image options",
        "GOFLET_MESSAGE_OPTIONS": "Ex. w=800&q=90",
        "AUTH_FAILED": "Authentication failed",
        "SERVER_ERROR": "Server error, please try again later",
        "CONFIG_MISSING": "Can't find goflet options",
    },
    "zh-CN": {
        "GOFLET": "Goflet",
        "GOFLET_JWT_ALGORITHM": "JWT 算法",
        "GOFLET_JWT_SECRET": "JWT 密钥",
        "GOFLET_JWT_ISSUER": "JWT 签发者",
        "GOFLET_ENDPOINT": "服务地址",
        "GOFLET_MESSAGE_ENDPOINT": "例如：https://goflet.example.com",
        "GOFLET_PATH": "存储路径",
        "GOFLET_MESSAGE_PATH": "例如：images/2024",
        "GOFLET_OPTIONS": "默认图片参数",
        "GOFLET_MESSAGE_OPTIONS": "例如：w=800&q=90",
        "AUTH_FAILED": "认证失败",
        "SERVER_ERROR": "服务端出错，请重试",
        "CONFIG_MISSING": "找不到 Goflet 图床配置",
    },
}


def get_locale(locale: str | None = None) -> str:
    resolved = locale or os.getenv("GOFLET_LOCALE") or DEFAULT_LOCALE
    return resolved if resolved in MESSAGES else DEFAULT_LOCALE


def translate(key: str, locale: str | None = None) -> str:
    """Look up ``key`` for ``locale``; unknown keys come back unchanged."""
    table = MESSAGES[get_locale(locale)]
    return table.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key)


def get_translator(locale: str | None = None) -> Translate:
    resolved = get_locale(locale)

    def _translate(key: str) -> str:
        return translate(key, resolved)

    return _translate


__all__ = ["Translate", "DEFAULT_LOCALE", "MESSAGES", "get_locale", "translate", "get_translator"]
