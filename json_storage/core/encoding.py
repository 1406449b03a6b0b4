"""Base64 helpers for stored values."""

import base64
import binascii

from .errors import StoreParseError


def well_formed(text: str) -> str:
    """
    Replace lone surrogates with U+FFFD, joining valid surrogate pairs.

    Non-UTF-8 argv bytes arrive as lone surrogates and cannot be encoded.
    """
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def encode_value(value: str) -> str:
    """UTF-8 encode text and return its base64 representation."""
    return base64.b64encode(well_formed(value).encode("utf-8")).decode("ascii")


def decode_value(encoded: str, key: str = None) -> str:
    """
    Decode a stored base64 value back to text.

    Invalid UTF-8 sequences are replaced rather than rejected.

    Raises:
        StoreParseError: value is not a string or not valid base64
    """
    if not isinstance(encoded, str):
        raise StoreParseError(f"Stored value for key '{key}' is not a string")

    try:
        raw = base64.b64decode(encoded)
    except (binascii.Error, ValueError) as e:
        raise StoreParseError(f"Stored value for key '{key}' is not valid base64: {e}") from e

    return raw.decode("utf-8", errors="replace")
