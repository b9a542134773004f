"""
Shape a remote RPC response into a tool result.

Priority order (first match wins):

    1. empty body            → EmptyResponseError
    2. non-2xx status        → RemoteStatusError (status + raw body)
    3. text/plain            → one text item, body verbatim
    4. image/*               → scratch file, optional re-encode, one image item
    5. application/json      → envelope pass-through, or wrapped content items
    6. anything else         → UnsupportedContentTypeError (type + preview)

Errors are raised as CallError subclasses; the caller renders them with
``to_result()``.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from docbridge.bridge.images import ImageStore, image_subtype
from docbridge.core.errors import (
    EmptyResponseError,
    RemoteStatusError,
    ResponseParseError,
    UnsupportedContentTypeError,
)

CONTENT_ITEM_TYPES = frozenset({"text", "image", "audio", "resource", "resource_link"})


def media_type(content_type: str | None) -> str:
    """Media type without parameters, lowercased (``text/plain; charset=utf-8`` → ``text/plain``)."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_json_media_type(value: str) -> bool:
    return value == "application/json" or value.endswith("+json")


def content_item(value: Any) -> dict[str, Any]:
    """Wrap one JSON value as a content item.

    Objects that already are content items are kept as-is; strings become
    text items; everything else becomes a text item holding its JSON text.
    """
    if isinstance(value, dict) and value.get("type") in CONTENT_ITEM_TYPES:
        return value
    if isinstance(value, str):
        return {"type": "text", "text": value}
    return {"type": "text", "text": json.dumps(value, ensure_ascii=False)}


def shape_response(
    response: httpx.Response,
    *,
    images: ImageStore,
    preview_chars: int = 1000,
) -> dict[str, Any]:
    """Interpret one RPC response as a tool-result payload.

    Raises:
        EmptyResponseError: Zero-length body
        RemoteStatusError: Non-2xx status
        ResponseParseError: Undecodable JSON or image
        UnsupportedContentTypeError: Any other content type
    """
    status = response.status_code
    if not response.content:
        raise EmptyResponseError(status)

    if not response.is_success:
        raise RemoteStatusError(status, response.text)

    content_type = response.headers.get("content-type")
    kind = media_type(content_type)

    if kind == "text/plain":
        return {"content": [{"type": "text", "text": response.text}]}

    subtype = image_subtype(kind)
    if subtype is not None:
        stored = images.save(response.content, subtype)
        return {"content": [{"type": "image", "data": stored.base64, "mimeType": kind}]}

    if is_json_media_type(kind):
        try:
            value = json.loads(response.content)
        except ValueError as e:
            raise ResponseParseError(
                f"Could not parse JSON response: {e}", cause=e
            ).with_context(http_status=status, content_type=content_type) from e

        if isinstance(value, dict) and "content" in value:
            return value
        values = value if isinstance(value, list) else [value]
        return {"content": [content_item(v) for v in values]}

    raise UnsupportedContentTypeError(content_type, response.text[:preview_chars])


__all__ = [
    "CONTENT_ITEM_TYPES",
    "content_item",
    "is_json_media_type",
    "media_type",
    "shape_response",
]
