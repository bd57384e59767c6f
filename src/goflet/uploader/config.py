"""Gateway configuration: resolution, validation and the host-facing schema."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import parse_qsl, urlparse

from .errors import ConfigMissingError, InvalidConfigError
from .messages import Translate, translate as default_translate
from .paths import canonicalize

JWT_ALGORITHMS: tuple[str, ...] = (
    "None",
    "HS256",
    "HS384",
    "HS512",
    "RS256",
    "RS384",
    "RS512",
    "ES256",
    "ES384",
    "ES512",
    "PS256",
    "PS384",
    "PS512",
)
DEFAULT_JWT_ALGORITHM = "HS256"
DEFAULT_JWT_ISSUER = "goflet-uploader"

# host mapping key -> accepted spellings
_MAPPING_KEYS: dict[str, tuple[str, ...]] = {
    "endpoint": ("endpoint",),
    "base_path": ("path", "basePath", "base_path"),
    "jwt_secret": ("jwtSecret", "jwt_secret"),
    "jwt_algorithm": ("jwtAlgorithm", "jwt_algorithm"),
    "jwt_issuer": ("jwtIssuer", "jwt_issuer"),
    "default_options": ("defaultOptions", "default_options"),
}

_ENV_KEYS: dict[str, str] = {
    "endpoint": "GOFLET_ENDPOINT",
    "base_path": "GOFLET_PATH",
    "jwt_secret": "GOFLET_JWT_SECRET",
    "jwt_algorithm": "GOFLET_JWT_ALGORITHM",
    "jwt_issuer": "GOFLET_JWT_ISSUER",
    "default_options": "GOFLET_DEFAULT_OPTIONS",
}


@dataclass(frozen=True)
class GatewayConfig:
    """Connection and signing settings for one gateway.

    ``base_path`` is canonicalized on construction, so backslashes and
    stray leading or trailing slashes never reach a token.
    """

    endpoint: str
    jwt_secret: str = ""
    base_path: str = ""
    jwt_algorithm: str = DEFAULT_JWT_ALGORITHM
    jwt_issuer: str = DEFAULT_JWT_ISSUER
    default_options: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_path", canonicalize(self.base_path))
        object.__setattr__(self, "endpoint", (self.endpoint or "").strip().rstrip("/"))

    @property
    def hostname(self) -> str:
        return urlparse(self.endpoint).hostname or ""

    def query_pairs(self) -> list[tuple[str, str]]:
        """``default_options`` parsed in order, blank values kept."""
        return parse_qsl(self.default_options.lstrip("?"), keep_blank_values=True)

    def query_map(self) -> dict[str, str]:
        return dict(self.query_pairs())

    def validate(self) -> GatewayConfig:
        if not self.endpoint:
            raise ConfigMissingError("endpoint is required")
        parsed = urlparse(self.endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise InvalidConfigError(
                f"endpoint must be an http(s) URL with a host, got {self.endpoint!r}"
            )
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GatewayConfig:
        values: dict[str, str] = {}
        for attr, keys in _MAPPING_KEYS.items():
            for key in keys:
                value = data.get(key)
                if value is not None and value != "":
                    values[attr] = str(value)
                    break
        if "endpoint" not in values:
            raise ConfigMissingError("endpoint is required")
        return cls(**values)

    @classmethod
    def from_env(cls) -> GatewayConfig | None:
        values = {attr: os.getenv(name) for attr, name in _ENV_KEYS.items()}
        if not values["endpoint"]:
            return None
        return cls(**{attr: value for attr, value in values.items() if value})


def resolve_config(config: GatewayConfig | Mapping[str, Any] | None = None) -> GatewayConfig:
    """Turn whatever the host handed over into a validated GatewayConfig.

    Falls back to ``GOFLET_*`` environment variables when ``config`` is None.
    """
    if config is None:
        resolved = GatewayConfig.from_env()
        if resolved is None:
            raise ConfigMissingError(default_translate("CONFIG_MISSING"))
    elif isinstance(config, GatewayConfig):
        resolved = config
    elif isinstance(config, Mapping):
        if not config:
            raise ConfigMissingError(default_translate("CONFIG_MISSING"))
        resolved = GatewayConfig.from_mapping(config)
    else:
        raise InvalidConfigError(f"unsupported config type: {type(config).__name__}")
    return resolved.validate()


@dataclass(frozen=True, slots=True)
class ConfigField:
    name: str
    type: Literal["list", "input"]
    alias: str
    default: str
    required: bool
    choices: tuple[str, ...] = ()
    message: str | None = None
    prefix: str | None = None


def config_fields(
    user_config: Mapping[str, Any] | None = None,
    translate: Translate = default_translate,
) -> list[ConfigField]:
    """Describe the settings a host should ask the user for.

    Defaults are taken from ``user_config`` (host camelCase keys) when set.
    """
    current = dict(user_config or {})

    def _current(key: str, fallback: str = "") -> str:
        value = current.get(key)
        return str(value) if value else fallback

    return [
        ConfigField(
            name="jwtAlgorithm",
            type="list",
            alias=translate("GOFLET_JWT_ALGORITHM"),
            choices=JWT_ALGORITHMS,
            default=_current("jwtAlgorithm", DEFAULT_JWT_ALGORITHM),
            required=False,
        ),
        ConfigField(
            name="jwtSecret",
            type="input",
            alias=translate("GOFLET_JWT_SECRET"),
            default=_current("jwtSecret"),
            required=True,
        ),
        ConfigField(
            name="jwtIssuer",
            type="input",
            alias=translate("GOFLET_JWT_ISSUER"),
            default=_current("jwtIssuer", DEFAULT_JWT_ISSUER),
            required=False,
        ),
        ConfigField(
            name="endpoint",
            type="input",
            prefix=translate("GOFLET_ENDPOINT"),
            alias=translate("GOFLET_ENDPOINT"),
            default=_current("endpoint"),
            message=translate("GOFLET_MESSAGE_ENDPOINT"),
            required=True,
        ),
        ConfigField(
            name="path",
            type="input",
            prefix=translate("GOFLET_PATH"),
            alias=translate("GOFLET_PATH"),
            default=_current("path"),
            message=translate("GOFLET_MESSAGE_PATH"),
            required=False,
        ),
        ConfigField(
            name="defaultOptions",
            type="input",
            prefix=translate("GOFLET_OPTIONS"),
            alias=translate("GOFLET_OPTIONS"),
            default=_current("defaultOptions"),
            message=translate("GOFLET_MESSAGE_OPTIONS"),
            required=False,
        ),
    ]


__all__ = [
    "JWT_ALGORITHMS",
    "DEFAULT_JWT_ALGORITHM",
    "DEFAULT_JWT_ISSUER",
    "GatewayConfig",
    "ConfigField",
    "resolve_config",
    "config_fields",
]
