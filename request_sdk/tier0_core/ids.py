"""
request_sdk.tier0_core.ids
───────────────────────────
ID generation for request correlation and multipart boundaries.
"""
from __future__ import annotations

import uuid


def new_uuid4() -> str:
    """Generate a random UUID v4 string."""
    return str(uuid.uuid4())


def new_request_id() -> str:
    """Short correlation id attached to every log line of one request."""
    return f"req_{uuid.uuid4().hex[:16]}"


def new_boundary(prefix: str = "Boundary-") -> str:
    """
    Multipart boundary: fixed prefix plus an uppercase UUID v4.
    Only needs to avoid colliding with field values, not to be secret.
    """
    return f"{prefix}{new_uuid4().upper()}"


__all__ = ["new_uuid4", "new_request_id", "new_boundary"]
