"""
request_sdk.tier0_core.http
────────────────────────────
HTTP primitives shared by the client: methods, the status codes the backend
speaks (including its non-standard 4000 "token expired"), and the typed
outcome envelope every request resolves to.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any


# ── Status code constants ──────────────────────────────────────────────────

class HTTP:
    """HTTP status codes the client distinguishes."""

    OK = 200

    # Backend-specific: the access token is no longer valid.
    TOKEN_EXPIRED = 4000


class Method(str, Enum):
    POST = "POST"
    GET = "GET"
    PUT = "PUT"
    DELETE = "DELETE"


class ResponseStatus(IntEnum):
    """Application-level result of a single request round trip."""

    TOKEN_EXPIRED = -3
    NETWORK_UNAVAILABLE = -2
    UNKNOWN_ERROR = -1
    FAILED = 0
    SUCCESS = 1

    @property
    def carries_payload(self) -> bool:
        return self in (ResponseStatus.SUCCESS, ResponseStatus.FAILED)


# ── Outcome envelope ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class RequestOutcome:
    """Exactly one per request. Payload only for SUCCESS/FAILED."""
    status: ResponseStatus
    payload: dict[str, Any] | None = None
    error: BaseException | None = None
    status_code: int | None = None
    request_id: str | None = None

    def __post_init__(self) -> None:
        if self.status.carries_payload and self.payload is None:
            raise ValueError(f"{self.status.name} outcome requires a payload")
        if not self.status.carries_payload and self.payload is not None:
            raise ValueError(f"{self.status.name} outcome cannot carry a payload")

    @property
    def ok(self) -> bool:
        return self.status is ResponseStatus.SUCCESS

    def with_request_id(self, request_id: str) -> RequestOutcome:
        return RequestOutcome(
            status=self.status,
            payload=self.payload,
            error=self.error,
            status_code=self.status_code,
            request_id=request_id,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.name.lower(),
            "payload": self.payload,
            "error": str(self.error) if self.error is not None else None,
            "status_code": self.status_code,
            "request_id": self.request_id,
        }


def success(payload: dict[str, Any], status_code: int | None = HTTP.OK) -> RequestOutcome:
    return RequestOutcome(ResponseStatus.SUCCESS, payload=payload, status_code=status_code)


def failed(payload: dict[str, Any], status_code: int | None = HTTP.OK) -> RequestOutcome:
    return RequestOutcome(ResponseStatus.FAILED, payload=payload, status_code=status_code)


def token_expired(status_code: int | None = HTTP.TOKEN_EXPIRED) -> RequestOutcome:
    return RequestOutcome(ResponseStatus.TOKEN_EXPIRED, status_code=status_code)


def network_unavailable() -> RequestOutcome:
    return RequestOutcome(ResponseStatus.NETWORK_UNAVAILABLE)


def unknown_error(
    error: BaseException | None = None, status_code: int | None = None
) -> RequestOutcome:
    return RequestOutcome(ResponseStatus.UNKNOWN_ERROR, error=error, status_code=status_code)


__all__ = [
    "HTTP",
    "Method",
    "ResponseStatus",
    "RequestOutcome",
    "success",
    "failed",
    "token_expired",
    "network_unavailable",
    "unknown_error",
]
