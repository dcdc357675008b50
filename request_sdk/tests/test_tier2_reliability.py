"""Tests for tier2_reliability modules."""
from __future__ import annotations

import socket

import pytest

from request_sdk.tier0_core.errors import ConfigurationError
from request_sdk.tier2_reliability.reachability import (
    AlwaysReachable,
    ReachabilityProbe,
    SocketReachability,
    StaticReachability,
    get_reachability_probe,
)


class TestReachability:
    def test_providers_satisfy_protocol(self):
        assert isinstance(AlwaysReachable(), ReachabilityProbe)
        assert isinstance(StaticReachability(), ReachabilityProbe)

    def test_static_probe_toggles_and_counts(self):
        probe = StaticReachability(reachable=False)
        assert probe.is_reachable() is False
        probe.reachable = True
        assert probe.is_reachable() is True
        assert probe.calls == 2

    def test_socket_probe_against_local_listener(self):
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        try:
            port = server.getsockname()[1]
            assert SocketReachability("127.0.0.1", port, timeout=1.0).is_reachable() is True
        finally:
            server.close()

    def test_socket_probe_closed_port(self):
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server.bind(("127.0.0.1", 0))
        port = server.getsockname()[1]
        server.close()
        assert SocketReachability("127.0.0.1", port, timeout=0.5).is_reachable() is False

    def test_registry_uses_mock_backend_in_tests(self):
        assert isinstance(get_reachability_probe(), StaticReachability)

    def test_registry_rejects_unknown_backend(self, monkeypatch):
        import request_sdk.tier0_core.config as _config
        import request_sdk.tier2_reliability.reachability as _reachability

        monkeypatch.setenv("REQUEST_SDK_REACHABILITY_BACKEND", "carrier-pigeon")
        _config._reset_config()
        _reachability._reset_provider()
        with pytest.raises(ConfigurationError):
            get_reachability_probe()
