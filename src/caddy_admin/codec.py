"""Payload encoding and response decoding for the admin API.

Caddyfile text is sent verbatim; every other payload is JSON-encoded.
Responses decode into a caller-chosen shape: ``str`` returns the raw body,
anything else is parsed as JSON and validated with a pydantic TypeAdapter.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import pydantic_core
from pydantic import TypeAdapter, ValidationError

from caddy_admin.exceptions import DecodeError

CADDYFILE = "text/caddyfile"
JSON = "application/json"


def media_type(content_type: str) -> str:
    """Return the lower-cased media type without parameters."""
    return content_type.split(";", 1)[0].strip().lower()


def is_raw_text(content_type: str) -> bool:
    return media_type(content_type) == CADDYFILE


def encode_payload(payload: object, content_type: str) -> bytes:
    if isinstance(payload, str) and is_raw_text(content_type):
        return payload.encode("utf-8")
    return pydantic_core.to_json(payload)


@lru_cache(maxsize=64)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def empty_value(response_type: Any) -> Any:
    """Value reported for an empty response body."""
    return "" if response_type is str else None


def decode_body(text: str, response_type: Any = Any) -> Any:
    """Decode a response body into ``response_type``.

    Raises:
        DecodeError: If the body is not valid JSON or does not match the shape.
    """
    if not text.strip():
        return empty_value(response_type)
    if response_type is str:
        return text
    try:
        return _adapter(response_type).validate_json(text)
    except ValidationError as e:
        raise DecodeError(f"Could not decode response as {_type_name(response_type)}: {e}") from e


def _type_name(response_type: Any) -> str:
    return getattr(response_type, "__name__", None) or repr(response_type)
