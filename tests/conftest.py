"""Shared fixtures for all tests."""

from collections.abc import Generator

import pytest

from goflet.uploader import GatewayConfig

SECRET = "test-secret-that-is-long-enough-for-hs256"
ENDPOINT = "https://goflet.example.com"


@pytest.fixture
def mock_env_clear(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear all goflet-related environment variables for testing.

    This keeps a developer's real gateway settings out of the tests.
    """
    env_vars_to_clear = [
        "GOFLET_ENDPOINT",
        "GOFLET_PATH",
        "GOFLET_JWT_SECRET",
        "GOFLET_JWT_ALGORITHM",
        "GOFLET_JWT_ISSUER",
        "GOFLET_DEFAULT_OPTIONS",
        "GOFLET_LOCALE",
        "DEBUG",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def secret() -> str:
    return SECRET


@pytest.fixture
def gateway_config(mock_env_clear) -> GatewayConfig:
    """A valid HS256 config with a base path and default image options."""
    return GatewayConfig(
        endpoint=ENDPOINT,
        base_path="/images/2024/",
        jwt_secret=SECRET,
        jwt_issuer="tests",
        default_options="w=800&q=90",
    )


@pytest.fixture
def broken_signing_config(mock_env_clear) -> GatewayConfig:
    """A config whose signing step always fails (unknown algorithm)."""
    return GatewayConfig(
        endpoint=ENDPOINT,
        base_path="images",
        jwt_secret=SECRET,
        jwt_algorithm="HS999",
    )
