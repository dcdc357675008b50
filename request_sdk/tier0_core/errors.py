"""
request_sdk.tier0_core.errors
──────────────────────────────
Standard error taxonomy for the request client. Every error carries a stable
machine-readable code, a user-safe message and internal detail. Raising a
ClientError reports it automatically if an error backend is configured.

Note that request outcomes (token expired, network unavailable, ...) are NOT
exceptions. Errors here are either raised for caller mistakes (bad URL) or
carried inside a RequestOutcome.

Select via:    REQUEST_SDK_ERROR_BACKEND=sentry|none
"""
from __future__ import annotations

import os
from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class ClientError(Exception):
    """
    Base class for all request_sdk errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface to end users
    - detail: internal context, never shown to users
    """

    code: str = "client_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "An unexpected error occurred.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)
        _capture(self)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class ValidationError(ClientError):
    """Caller supplied input the client cannot send."""
    code = "validation_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Validation failed.",
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(code, user_message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


class InvalidURLError(ValidationError):
    """URL string does not parse to an absolute http(s) URL."""
    code = "invalid_url"

    def __init__(self, url: str, reason: str = "not an absolute http(s) URL") -> None:
        self.url = url
        super().__init__(
            user_message="The request URL is invalid.",
            fields={"url": reason},
            detail=f"Invalid URL {url!r}: {reason}",
            url=url,
        )


class SerializationError(ClientError):
    """Request parameters could not be encoded."""
    code = "serialization_error"


class UpstreamError(ClientError):
    """Transport-level failure talking to the backend."""
    code = "upstream_error"


class ConfigurationError(ClientError):
    """Misconfiguration detected while building a provider or client."""
    code = "configuration_error"


# ── Error capture backend ─────────────────────────────────────────────────────

def _capture(error: ClientError) -> None:
    """Send error to configured backend. Called automatically by ClientError.__init__."""
    backend = os.getenv("REQUEST_SDK_ERROR_BACKEND", "none").lower()
    if backend == "sentry":
        _capture_sentry(error)


def _capture_sentry(error: ClientError) -> None:
    import sentry_sdk

    if isinstance(error, (UpstreamError, ConfigurationError)):
        sentry_sdk.capture_exception(error)
    else:
        sentry_sdk.capture_message(
            str(error),
            level="warning",
            extras={"code": error.code, **error.metadata},
        )


__all__ = [
    "ClientError",
    "ValidationError",
    "InvalidURLError",
    "SerializationError",
    "UpstreamError",
    "ConfigurationError",
]
