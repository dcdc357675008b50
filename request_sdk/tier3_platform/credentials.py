"""
request_sdk.tier3_platform.credentials
───────────────────────────────────────
Device-token and access-token store read by the client for every request.
Tokens are held as pydantic SecretStr so they never show up in reprs or logs;
the store hands the raw value to the client only when building headers.

Select via:    REQUEST_SDK_CREDENTIALS_BACKEND=env|memory|mock
"""
from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

from pydantic import SecretStr

from request_sdk.tier0_core.config import get_config
from request_sdk.tier0_core.errors import ConfigurationError


# ── Provider protocol ─────────────────────────────────────────────────────────

@runtime_checkable
class CredentialStore(Protocol):
    def get_device_token(self) -> str | None: ...
    def get_access_token(self) -> str | None: ...


def _reveal(value: SecretStr | None) -> str | None:
    return value.get_secret_value() if value is not None else None


# ── In-memory store (app session / tests) ─────────────────────────────────────

class InMemoryCredentialStore:
    """Process-local token store. Set after login, cleared on logout."""

    def __init__(
        self,
        device_token: str | None = None,
        access_token: str | None = None,
    ) -> None:
        self._device_token = SecretStr(device_token) if device_token is not None else None
        self._access_token = SecretStr(access_token) if access_token is not None else None

    def get_device_token(self) -> str | None:
        return _reveal(self._device_token)

    def get_access_token(self) -> str | None:
        return _reveal(self._access_token)

    def set_device_token(self, token: str | None) -> None:
        self._device_token = SecretStr(token) if token is not None else None

    def set_access_token(self, token: str | None) -> None:
        self._access_token = SecretStr(token) if token is not None else None

    def clear(self) -> None:
        """Forget the access token (logout). The device token survives."""
        self._access_token = None

    def __repr__(self) -> str:
        return (
            f"InMemoryCredentialStore(device_token={self._device_token!r}, "
            f"access_token={self._access_token!r})"
        )


# ── Env store (dev / CLI use) ─────────────────────────────────────────────────

class EnvCredentialStore:
    """Reads REQUEST_SDK_DEVICE_TOKEN and REQUEST_SDK_ACCESS_TOKEN on every call."""

    DEVICE_TOKEN_VAR = "REQUEST_SDK_DEVICE_TOKEN"
    ACCESS_TOKEN_VAR = "REQUEST_SDK_ACCESS_TOKEN"

    def get_device_token(self) -> str | None:
        return os.environ.get(self.DEVICE_TOKEN_VAR)

    def get_access_token(self) -> str | None:
        return os.environ.get(self.ACCESS_TOKEN_VAR)


# ── Provider registry ─────────────────────────────────────────────────────────

_provider: CredentialStore | None = None


def _build_provider() -> CredentialStore:
    name = get_config().credentials_backend.lower()
    if name == "env":
        return EnvCredentialStore()
    if name in ("memory", "mock"):
        return InMemoryCredentialStore()
    raise ConfigurationError(
        "unknown_credentials_backend",
        f"Unknown REQUEST_SDK_CREDENTIALS_BACKEND={name!r}. Valid: env, memory, mock",
    )


def get_credential_store() -> CredentialStore:
    global _provider
    if _provider is None:
        _provider = _build_provider()
    return _provider


def _reset_provider() -> None:
    global _provider
    _provider = None


__all__ = [
    "CredentialStore",
    "InMemoryCredentialStore",
    "EnvCredentialStore",
    "get_credential_store",
]
