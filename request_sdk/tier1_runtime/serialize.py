"""
request_sdk.tier1_runtime.serialize
────────────────────────────────────
JSON codec for request parameters and response bodies. Both sides operate
on plain key-value maps; Pydantic models are accepted on the encode side.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

from pydantic import BaseModel

from request_sdk.tier0_core.errors import SerializationError


def encode_json(obj: Mapping[str, Any] | BaseModel | None) -> bytes:
    """
    Encode request parameters to UTF-8 JSON bytes. ``None`` encodes to an
    empty body.

    Raises SerializationError for values JSON cannot represent.
    """
    if obj is None:
        return b""
    if isinstance(obj, BaseModel):
        return obj.model_dump_json().encode()
    try:
        return json.dumps(dict(obj), separators=(",", ":")).encode()
    except (TypeError, ValueError) as exc:
        raise SerializationError(
            user_message="Request parameters could not be encoded.",
            detail=f"JSON encoding failed: {exc}",
        ) from exc


def decode_json_object(data: bytes | str) -> dict[str, Any]:
    """
    Decode a response body that must be a JSON object.

    Raises ValueError (json.JSONDecodeError included) when the body is not
    valid JSON or its top level is not an object.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    decoded = json.loads(data)
    if not isinstance(decoded, dict):
        raise ValueError(f"expected a JSON object, got {type(decoded).__name__}")
    return decoded


def to_dict(obj: BaseModel) -> dict[str, Any]:
    """Convert a Pydantic model to a plain dict suitable for request parameters."""
    return obj.model_dump(mode="json")


__all__ = ["encode_json", "decode_json_object", "to_dict"]
