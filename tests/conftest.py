"""Shared fixtures for the aCommerce client tests."""

import json
from unittest.mock import Mock

import pytest

from acommerce_mcp.api.auth import Credentials, TokenManager
from acommerce_mcp.utils.cache import InMemoryTokenCache


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_response(status_code=200, body=None, headers=None, text=None):
    """Build a requests.Response stand-in."""
    response = Mock()
    response.status_code = status_code
    response.headers = headers or {}
    if body is None:
        response.content = text.encode() if text else b""
        response.text = text or ""
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.content = json.dumps(body).encode()
        response.text = json.dumps(body)
        response.json.return_value = body
    return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def credentials():
    return Credentials("test_user", "test_key", production=True)


@pytest.fixture
def token_manager(credentials, clock):
    """Token manager whose cache already holds a valid token."""
    cache = InMemoryTokenCache(clock=clock)
    cache.put(credentials.cache_key, "cached_token", 3600)
    return TokenManager(credentials, cache=cache, ttl=3600)
