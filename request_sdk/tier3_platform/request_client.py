"""
request_sdk.tier3_platform.request_client
──────────────────────────────────────────
The request client: builds one HTTP request (JSON or multipart), attaches
the standard device/location/auth headers, sends it once and resolves it to
exactly one RequestOutcome. No retries, no caching.

Backed by: httpx (async HTTP, one shared connection-reusing AsyncClient).
TLS certificates are always verified.

Usage::

    async with RequestClient() as client:
        outcome = await client.send(Method.POST, "https://api.example.com/login",
                                    {"email": "a@b.c", "password": "..."})
        if outcome.status is ResponseStatus.TOKEN_EXPIRED:
            ...

    # callback style, delivered on the dispatcher's context
    client.dispatch(Method.GET, url, on_complete=render)
"""
from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import BaseModel

from request_sdk.tier0_core.config import ClientConfig, get_config
from request_sdk.tier0_core.errors import (
    InvalidURLError,
    SerializationError,
    UpstreamError,
    ValidationError,
)
from request_sdk.tier0_core.http import (
    Method,
    RequestOutcome,
    network_unavailable,
    unknown_error,
)
from request_sdk.tier0_core.ids import new_boundary, new_request_id
from request_sdk.tier0_core.logging import get_logger
from request_sdk.tier0_core.redact import redact_dict, scrub_string
from request_sdk.tier1_runtime.dispatch import CompletionCallback, CompletionDispatcher
from request_sdk.tier1_runtime.serialize import encode_json, to_dict
from request_sdk.tier2_reliability.reachability import (
    ReachabilityProbe,
    get_reachability_probe,
)
from request_sdk.tier3_platform.credentials import CredentialStore, get_credential_store
from request_sdk.tier3_platform.location import LocationProvider, get_location_provider
from request_sdk.tier3_platform.multipart import (
    Attachment,
    AttachmentLike,
    ImageType,
    build_multipart_body,
    content_type_for,
    normalize_attachments,
)
from request_sdk.tier3_platform.response import classify_response

log = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"


# ── Domain model ─────────────────────────────────────────────────────────────

@dataclass
class Request:
    """One call site's request. Built, sent once, discarded."""
    method: Method
    url: str
    parameters: Mapping[str, Any] | None = None
    attachments: list[Attachment] = field(default_factory=list)
    image_type: ImageType = ImageType.JPEG
    requires_auth: bool = False
    multipart: bool = False

    def __post_init__(self) -> None:
        self.method = _coerce_method(self.method)
        if isinstance(self.parameters, BaseModel):
            self.parameters = to_dict(self.parameters)
        self.image_type = ImageType(self.image_type)
        if self.parameters is not None and not isinstance(self.parameters, Mapping):
            raise ValidationError(
                "invalid_parameters",
                "Request parameters must be a key-value mapping.",
                fields={"parameters": type(self.parameters).__name__},
            )
        self.attachments = normalize_attachments(self.attachments)


def _coerce_method(method: Method | str) -> Method:
    if isinstance(method, Method):
        return method
    try:
        return Method(str(method).upper())
    except ValueError as exc:
        raise ValidationError(
            "invalid_method",
            f"Unsupported HTTP method {method!r}.",
            fields={"method": str(method)},
        ) from exc


def validate_url(url: str) -> httpx.URL:
    """Parse *url* as an absolute http(s) URL or raise InvalidURLError."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidURLError(str(url), str(exc)) from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidURLError(str(url))
    return parsed


# ── Client ────────────────────────────────────────────────────────────────────

class RequestClient:
    """
    Async request client. Construct once and inject where needed; the
    underlying httpx.AsyncClient is safe for concurrent in-flight requests.

    Collaborators default to the configured providers
    (REQUEST_SDK_REACHABILITY_BACKEND, REQUEST_SDK_CREDENTIALS_BACKEND,
    REQUEST_SDK_LOCATION_BACKEND). Pass ``transport`` to swap the network
    layer (e.g. httpx.MockTransport in tests).
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        reachability: ReachabilityProbe | None = None,
        credentials: CredentialStore | None = None,
        location: LocationProvider | None = None,
        dispatcher: CompletionDispatcher | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or get_config()
        self._reachability = reachability or get_reachability_probe()
        self._credentials = credentials or get_credential_store()
        self._location = location or get_location_provider()
        self._dispatcher = dispatcher or CompletionDispatcher()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.request_timeout),
            transport=transport,
        )
        self._tasks: set[asyncio.Task] = set()

    async def __aenter__(self) -> RequestClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ── Public API ────────────────────────────────────────────────────────────

    async def send(
        self,
        method: Method | str = Method.POST,
        url: str = "",
        parameters: Mapping[str, Any] | None = None,
        requires_auth: bool = False,
        *,
        on_complete: CompletionCallback | None = None,
    ) -> RequestOutcome:
        """Send a JSON request and resolve it to one outcome."""
        request = Request(method, url, parameters, requires_auth=requires_auth)
        return await self._execute(request, on_complete)

    async def send_multipart(
        self,
        method: Method | str = Method.POST,
        url: str = "",
        parameters: Mapping[str, Any] | None = None,
        attachments: Iterable[AttachmentLike] | None = None,
        image_type: ImageType = ImageType.JPEG,
        requires_auth: bool = False,
        *,
        on_complete: CompletionCallback | None = None,
    ) -> RequestOutcome:
        """Send a multipart/form-data request (text fields plus images)."""
        request = Request(
            method,
            url,
            parameters,
            attachments=list(attachments or ()),
            image_type=image_type,
            requires_auth=requires_auth,
            multipart=True,
        )
        return await self._execute(request, on_complete)

    def dispatch(self, *args: Any, **kwargs: Any) -> asyncio.Task[RequestOutcome]:
        """Fire-and-forget ``send``; returns the scheduled task."""
        return self._schedule(self.send(*args, **kwargs))

    def dispatch_multipart(self, *args: Any, **kwargs: Any) -> asyncio.Task[RequestOutcome]:
        """Fire-and-forget ``send_multipart``; returns the scheduled task."""
        return self._schedule(self.send_multipart(*args, **kwargs))

    # ── Internals ─────────────────────────────────────────────────────────────

    def _schedule(self, coro: Any) -> asyncio.Task[RequestOutcome]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        _log_task_failure(task)

    async def _execute(
        self, request: Request, on_complete: CompletionCallback | None
    ) -> RequestOutcome:
        request_id = new_request_id()
        bound = log.bind(
            request_id=request_id,
            method=request.method.value,
            url=scrub_string(str(request.url)),
        )

        if not await asyncio.to_thread(self._reachability.is_reachable):
            bound.warning("request.network_unavailable")
            outcome = network_unavailable()
        else:
            url = validate_url(request.url)
            try:
                body, content_type = self._encode_body(request)
            except SerializationError as exc:
                bound.error("request.encoding_failed", error=exc.detail)
                outcome = unknown_error(exc)
            else:
                headers = self._build_headers(request, content_type, len(body))
                if request.parameters is not None:
                    bound.debug("request.parameters", parameters=redact_dict(dict(request.parameters)))
                outcome = await self._transmit(request, url, headers, body, bound)

        outcome = outcome.with_request_id(request_id)
        bound.info(
            "request.completed",
            status=outcome.status.name,
            status_code=outcome.status_code,
        )
        if on_complete is not None:
            self._dispatcher.deliver(on_complete, outcome)
        return outcome

    def _encode_body(self, request: Request) -> tuple[bytes, str]:
        if request.multipart:
            boundary = new_boundary(self._config.boundary_prefix)
            body = build_multipart_body(
                request.parameters,
                request.attachments,
                request.image_type,
                boundary,
            )
            return body, content_type_for(boundary)
        return encode_json(request.parameters), JSON_CONTENT_TYPE

    def _build_headers(
        self, request: Request, content_type: str, content_length: int
    ) -> dict[str, str]:
        config = self._config
        location = self._location.get_current_location()
        headers: dict[str, str] = {
            "Content-Type": content_type,
            "Content-Length": str(content_length),
            "device_type": config.device_type,
            config.device_token_header: (
                self._credentials.get_device_token() or config.simulator_device_token
            ),
            "lat": str(location.latitude),
            "lng": str(location.longitude),
        }
        if request.requires_auth:
            token = self._credentials.get_access_token()
            if token:
                headers["authorization"] = f"Bearer {token}"
            else:
                log.warning("request.missing_access_token", url=scrub_string(request.url))
        return headers

    async def _transmit(
        self,
        request: Request,
        url: httpx.URL,
        headers: dict[str, str],
        body: bytes,
        bound: Any,
    ) -> RequestOutcome:
        bound.info("request.sent", content_length=len(body))
        try:
            response = await self._client.request(
                request.method.value,
                url,
                headers=headers,
                content=body,
                timeout=self._config.request_timeout,
            )
        except httpx.HTTPError as exc:
            bound.warning("request.transport_error", error=scrub_string(str(exc)))
            error = UpstreamError(
                user_message="The server could not be reached.",
                detail=f"{request.method.value} {scrub_string(str(url))} failed: {exc}",
            )
            error.__cause__ = exc
            return classify_response(error, None, None)

        outcome = classify_response(
            None,
            response.status_code,
            response.content,
            token_expired_status=self._config.token_expired_status,
        )
        if outcome.payload is not None:
            bound.debug("request.response", payload=redact_dict(outcome.payload))
        return outcome



def _log_task_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        log.error("request.dispatch_failed", error=repr(exc))


__all__ = ["Request", "RequestClient", "validate_url"]
