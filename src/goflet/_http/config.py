"""HTTP configuration for gateway clients."""

from __future__ import annotations

from dataclasses import dataclass, field

from .._version import VERSION

DEFAULT_TIMEOUT = 60.0
USER_AGENT = f"goflet-uploader/{VERSION}"


@dataclass
class HTTPConfig:
    """Configuration for HTTP requests to the gateway."""

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT
    default_headers: dict[str, str] = field(default_factory=dict)


__all__ = ["HTTPConfig", "DEFAULT_TIMEOUT", "USER_AGENT"]
