"""
request_sdk test configuration.

All tests run with mock collaborators by default, no network required.
HTTP traffic is served by httpx.MockTransport handlers.
"""
from __future__ import annotations

import os

import httpx
import pytest

# ── Force mock providers for all tests ────────────────────────────────────
# These must be set before any request_sdk modules are imported.

os.environ.setdefault("REQUEST_SDK_ENVIRONMENT", "test")
os.environ.setdefault("REQUEST_SDK_REACHABILITY_BACKEND", "mock")
os.environ.setdefault("REQUEST_SDK_CREDENTIALS_BACKEND", "mock")
os.environ.setdefault("REQUEST_SDK_LOCATION_BACKEND", "fixed")
os.environ.setdefault("REQUEST_SDK_ERROR_BACKEND", "none")


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_module_singletons():
    """
    Reset all cached provider singletons between tests.
    This ensures each test gets a fresh provider with no state bleed.
    """
    import request_sdk.tier0_core.config as _config
    import request_sdk.tier2_reliability.reachability as _reachability
    import request_sdk.tier3_platform.credentials as _credentials
    import request_sdk.tier3_platform.location as _location

    yield

    _config._reset_config()
    _reachability._reset_provider()
    _credentials._reset_provider()
    _location._reset_provider()


@pytest.fixture
def reachability():
    from request_sdk.tier2_reliability.reachability import StaticReachability
    return StaticReachability(reachable=True)


@pytest.fixture
def credentials():
    from request_sdk.tier3_platform.credentials import InMemoryCredentialStore
    return InMemoryCredentialStore(device_token="device-abc", access_token="access-xyz")


@pytest.fixture
def location():
    from request_sdk.tier3_platform.location import FixedLocationProvider
    return FixedLocationProvider(12.5, -45.25)


class RecordingHandler:
    """MockTransport handler that records requests and replies with a canned response."""

    def __init__(self, status_code: int = 200, content: bytes = b'{"status":"success"}') -> None:
        self.status_code = status_code
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.content)


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def make_client(reachability, credentials, location, handler):
    """Build a RequestClient wired to the mock collaborators and transport."""
    from request_sdk.tier3_platform.request_client import RequestClient

    def _make(**overrides):
        kwargs = {
            "reachability": reachability,
            "credentials": credentials,
            "location": location,
            "transport": httpx.MockTransport(handler),
        }
        kwargs.update(overrides)
        return RequestClient(**kwargs)

    return _make
