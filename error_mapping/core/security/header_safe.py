"""Header-safe encoding for reason strings.

Reason strings may travel in transport headers that only accept US-ASCII.
Text that is already ASCII passes through untouched; anything else is
replaced by its UTF-8 bytes in unpadded standard base64, behind a prefix
that lets a consumer reverse it.

Usage:
    make_header_safe("00001")   # "00001"
    make_header_safe("Ñ")       # "base64:w5E"
    decode_header_safe("base64:w5E")  # "Ñ"
"""

from __future__ import annotations

import base64
import binascii

BASE64_PREFIX = "base64:"


def make_header_safe(text: str | None) -> str | None:
    """Return ``text`` unchanged if ASCII (or absent), otherwise base64 it."""
    if text is None or text.isascii():
        return text
    encoded = base64.b64encode(text.encode("utf-8", errors="surrogatepass")).decode("ascii")
    return BASE64_PREFIX + encoded.rstrip("=")


def decode_header_safe(text: str | None) -> str | None:
    """Reverse :func:`make_header_safe`.

    Values without the prefix are returned as is. A prefixed value that is
    not valid base64 raises ``ValueError``.
    """
    if text is None or not text.startswith(BASE64_PREFIX):
        return text

    payload = text[len(BASE64_PREFIX) :]
    padded = payload + "=" * (-len(payload) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid header-safe value: {text!r}") from exc
    return raw.decode("utf-8", errors="surrogatepass")
