"""
request_sdk.tier3_platform.response
────────────────────────────────────
Maps one raw HTTP round trip to exactly one RequestOutcome.

Decision order, first match wins:
    1. transport error            → UNKNOWN_ERROR (carries the error)
    2. status != 200              → TOKEN_EXPIRED if 4000, else UNKNOWN_ERROR
    3. empty body                 → UNKNOWN_ERROR
    4. body not a JSON object     → UNKNOWN_ERROR
    5. "status" != "success"      → FAILED with the decoded object
    6. otherwise                  → SUCCESS with the decoded object
"""
from __future__ import annotations

from request_sdk.tier0_core.http import (
    HTTP,
    RequestOutcome,
    failed,
    success,
    token_expired,
    unknown_error,
)
from request_sdk.tier1_runtime.serialize import decode_json_object

SUCCESS_MARKER = "success"


def classify_response(
    error: BaseException | None,
    status_code: int | None,
    body: bytes | None,
    *,
    token_expired_status: int = HTTP.TOKEN_EXPIRED,
) -> RequestOutcome:
    if error is not None:
        return unknown_error(error, status_code=status_code)

    if status_code != HTTP.OK:
        if status_code == token_expired_status:
            return token_expired(status_code)
        return unknown_error(status_code=status_code)

    if not body:
        return unknown_error(status_code=status_code)

    try:
        payload = decode_json_object(body)
    except (ValueError, RecursionError) as exc:
        return unknown_error(exc, status_code=status_code)

    if payload.get("status") != SUCCESS_MARKER:
        return failed(payload, status_code)
    return success(payload, status_code)


__all__ = ["classify_response", "SUCCESS_MARKER"]
