"""
request_sdk.tier2_reliability.reachability
───────────────────────────────────────────
Connectivity probe consulted before every request. When the probe reports
the network as unreachable the client resolves the request immediately as
NETWORK_UNAVAILABLE without touching the transport.

Select via:    REQUEST_SDK_REACHABILITY_BACKEND=socket|always|mock
"""
from __future__ import annotations

import socket
import time
from typing import Protocol, runtime_checkable

from request_sdk.tier0_core.config import get_config
from request_sdk.tier0_core.errors import ConfigurationError
from request_sdk.tier0_core.logging import get_logger

log = get_logger(__name__)


# ── Provider protocol ─────────────────────────────────────────────────────────

@runtime_checkable
class ReachabilityProbe(Protocol):
    def is_reachable(self) -> bool: ...


# ── Providers ─────────────────────────────────────────────────────────────────

class AlwaysReachable:
    """Assumes connectivity; the transport reports real failures."""

    def is_reachable(self) -> bool:
        return True


class StaticReachability:
    """Togglable probe for tests and offline simulation."""

    def __init__(self, reachable: bool = True) -> None:
        self.reachable = reachable
        self.calls = 0

    def is_reachable(self) -> bool:
        self.calls += 1
        return self.reachable


class SocketReachability:
    """
    TCP connect probe against a well-known host.

    A successful result is cached for ``cache_seconds`` so bursts of
    requests don't each pay for a connect.
    """

    def __init__(
        self,
        host: str,
        port: int,
        timeout: float = 1.5,
        cache_seconds: float = 5.0,
    ) -> None:
        self._address = (host, port)
        self._timeout = timeout
        self._cache_seconds = cache_seconds
        self._last_ok: float | None = None

    def is_reachable(self) -> bool:
        now = time.monotonic()
        if self._last_ok is not None and now - self._last_ok < self._cache_seconds:
            return True
        try:
            with socket.create_connection(self._address, timeout=self._timeout):
                pass
        except OSError as exc:
            log.warning(
                "reachability.probe_failed",
                host=self._address[0],
                port=self._address[1],
                error=str(exc),
            )
            self._last_ok = None
            return False
        self._last_ok = now
        return True


# ── Provider registry ─────────────────────────────────────────────────────────

_provider: ReachabilityProbe | None = None


def _build_provider() -> ReachabilityProbe:
    config = get_config()
    name = config.reachability_backend.lower()
    if name == "socket":
        return SocketReachability(
            config.reachability_host,
            config.reachability_port,
            timeout=config.reachability_timeout,
        )
    if name in ("always", "none"):
        return AlwaysReachable()
    if name == "mock":
        return StaticReachability()
    raise ConfigurationError(
        "unknown_reachability_backend",
        f"Unknown REQUEST_SDK_REACHABILITY_BACKEND={name!r}. Valid: socket, always, mock",
    )


def get_reachability_probe() -> ReachabilityProbe:
    global _provider
    if _provider is None:
        _provider = _build_provider()
    return _provider


def _reset_provider() -> None:
    global _provider
    _provider = None


__all__ = [
    "ReachabilityProbe",
    "AlwaysReachable",
    "StaticReachability",
    "SocketReachability",
    "get_reachability_probe",
]
