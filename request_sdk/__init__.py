"""
request_sdk
───────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from request_sdk.tier0_core.logging import get_logger
from request_sdk.tier0_core.errors import (
    ClientError,
    ValidationError,
    InvalidURLError,
    SerializationError,
    UpstreamError,
    ConfigurationError,
)
from request_sdk.tier0_core.config import get_config, ClientConfig
from request_sdk.tier0_core.http import HTTP, Method, ResponseStatus, RequestOutcome

from request_sdk.tier1_runtime.dispatch import CompletionDispatcher

from request_sdk.tier2_reliability.reachability import (
    ReachabilityProbe,
    AlwaysReachable,
    StaticReachability,
    SocketReachability,
)

from request_sdk.tier3_platform.credentials import (
    CredentialStore,
    InMemoryCredentialStore,
    EnvCredentialStore,
)
from request_sdk.tier3_platform.location import (
    Location,
    LocationProvider,
    FixedLocationProvider,
    MutableLocationProvider,
)
from request_sdk.tier3_platform.multipart import Attachment, ImageType, build_multipart_body
from request_sdk.tier3_platform.response import classify_response
from request_sdk.tier3_platform.request_client import Request, RequestClient

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "ClientError", "ValidationError", "InvalidURLError",
    "SerializationError", "UpstreamError", "ConfigurationError",
    # config
    "get_config", "ClientConfig",
    # http
    "HTTP", "Method", "ResponseStatus", "RequestOutcome",
    # dispatch
    "CompletionDispatcher",
    # reachability
    "ReachabilityProbe", "AlwaysReachable", "StaticReachability", "SocketReachability",
    # credentials
    "CredentialStore", "InMemoryCredentialStore", "EnvCredentialStore",
    # location
    "Location", "LocationProvider", "FixedLocationProvider", "MutableLocationProvider",
    # multipart
    "Attachment", "ImageType", "build_multipart_body",
    # response
    "classify_response",
    # client
    "Request", "RequestClient",
]
