"""
request_sdk.tier3_platform.multipart
─────────────────────────────────────
multipart/form-data body construction for image uploads.

Layout: every text parameter as a ``name="..."`` part, then every attachment
as an ``image="..."; filename="<name>.<ext>"`` part carrying the raw bytes,
then the closing ``--<boundary>--`` marker.

Usage:
    boundary = new_boundary()
    body = build_multipart_body(
        {"caption": "hello"},
        [Attachment("photo", jpeg_bytes)],
        ImageType.JPEG,
        boundary,
    )
    headers["Content-Type"] = content_type_for(boundary)
"""
from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from request_sdk.tier0_core.errors import ValidationError


class ImageType(Enum):
    PNG = "png"
    JPEG = "jpeg"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"


@dataclass(frozen=True)
class Attachment:
    """A named binary payload, sent as ``<name>.<ext>``."""
    name: str
    data: bytes

    def __post_init__(self) -> None:
        if not self.name:
            raise ValidationError(
                "invalid_attachment",
                "Attachment name must not be empty.",
                fields={"name": "empty"},
            )
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise ValidationError(
                "invalid_attachment",
                "Attachment data must be bytes.",
                fields={self.name: type(self.data).__name__},
            )


AttachmentLike = Union[Attachment, tuple[str, bytes], Mapping[str, bytes]]

_CRLF = b"\r\n"


def normalize_attachments(items: Iterable[AttachmentLike] | None) -> list[Attachment]:
    """
    Flatten the accepted attachment shapes into Attachments, preserving order.
    Mappings contribute one attachment per entry in iteration order.
    """
    result: list[Attachment] = []
    for item in items or ():
        if isinstance(item, Attachment):
            result.append(item)
        elif isinstance(item, Mapping):
            result.extend(Attachment(name, bytes(data)) for name, data in item.items())
        elif isinstance(item, tuple) and len(item) == 2:
            result.append(Attachment(item[0], bytes(item[1])))
        else:
            raise ValidationError(
                "invalid_attachment",
                "Attachments must be Attachment, (name, bytes) or {name: bytes}.",
                fields={"attachment": type(item).__name__},
            )
    return result


def _render_value(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, bool):
        return b"true" if value else b"false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":")).encode("utf-8")
    return str(value).encode("utf-8")


def build_multipart_body(
    parameters: Mapping[str, Any] | None,
    attachments: Iterable[AttachmentLike] | None,
    image_type: ImageType,
    boundary: str,
) -> bytes:
    delimiter = f"--{boundary}\r\n".encode("utf-8")
    parts: list[bytes] = []

    for key, value in (parameters or {}).items():
        parts.append(delimiter)
        parts.append(f'Content-Disposition: form-data; name="{key}"\r\n\r\n'.encode("utf-8"))
        parts.append(_render_value(value))
        parts.append(_CRLF)

    ext = image_type.extension
    for attachment in normalize_attachments(attachments):
        parts.append(delimiter)
        parts.append(
            (
                f'Content-Disposition: form-data; image="{attachment.name}"; '
                f'filename="{attachment.name}.{ext}"\r\n'
            ).encode("utf-8")
        )
        parts.append(f"Content-Type: {image_type.mime_type}\r\n\r\n".encode("utf-8"))
        parts.append(bytes(attachment.data))

    parts.append(_CRLF)
    parts.append(f"--{boundary}--\r\n".encode("utf-8"))
    return b"".join(parts)


def content_type_for(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"


__all__ = [
    "ImageType",
    "Attachment",
    "AttachmentLike",
    "normalize_attachments",
    "build_multipart_body",
    "content_type_for",
]
