"""Fixtures for integration tests using respx mocking."""

import pytest

GATEWAY = "https://goflet.example.com"


@pytest.fixture
def png_bytes() -> bytes:
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def gateway_mapping(secret) -> dict:
    """Config as a host would hand it over (camelCase keys)."""
    return {
        "endpoint": GATEWAY,
        "path": "\\images\\2024\\",
        "jwtSecret": secret,
        "jwtAlgorithm": "HS256",
        "jwtIssuer": "tests",
        "defaultOptions": "w=800&q=90",
    }
