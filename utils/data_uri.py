"""Helpers for building and reading base64 data URIs."""

import base64
import binascii
from typing import Optional, Tuple

DEFAULT_IMAGE_MIME = "image/png"


def encode_data_uri(data: bytes | str, mime_type: Optional[str] = None) -> str:
    """Encode image bytes (or an already base64-encoded string) as a data URI."""
    if isinstance(data, str):
        encoded = data
    else:
        encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type or DEFAULT_IMAGE_MIME};base64,{encoded}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """Return the media type and raw bytes of a base64 data URI.

    Raises:
        ValueError: If the string is not a base64 data URI or the payload is invalid.
    """
    if not uri or not uri.startswith("data:"):
        raise ValueError("Not a data URI.")
    header, sep, payload = uri[len("data:"):].partition(",")
    if not sep:
        raise ValueError("Data URI is missing its payload.")
    mime_type, _, encoding = header.partition(";")
    if encoding != "base64":
        raise ValueError("Only base64 data URIs are supported.")
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Invalid base64 payload in data URI.") from exc
    return mime_type or DEFAULT_IMAGE_MIME, raw
