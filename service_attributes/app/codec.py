"""
URL-safe codec for parameters carried in browser URLs.

State that would otherwise live in a server-side session (the requested
attribute list, the continuation URL, the callback URL) is round-tripped
through the client as path segments encoded here. The codec only guarantees
that ``decode(encode(b)) == b``; checking what the decoded content means is
up to the caller.
"""

import base64
import binascii
import json
import re
from typing import Any, List, Union

from .errors import DecodeError, JsonError, UtfError

_URL_SAFE_TOKEN = re.compile(r"^[A-Za-z0-9_-]*={0,2}$")


def encode(data: Union[bytes, str]) -> str:
    """Encode bytes (or UTF-8 text) with the URL-safe base64 alphabet."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).decode("ascii")


def decode(token: str) -> bytes:
    """Decode a token produced by :func:`encode`.

    Padding may be omitted, but when present it must be correct.
    """
    if not _URL_SAFE_TOKEN.match(token):
        raise DecodeError(
            "Encoded parameter contains characters outside the URL-safe alphabet",
            details={"length": len(token)}
        )

    body = token.rstrip("=")
    if len(body) % 4 == 1:
        raise DecodeError("Encoded parameter has an invalid length", details={"length": len(token)})
    if len(body) != len(token) and len(token) % 4 != 0:
        raise DecodeError("Encoded parameter has invalid padding", details={"length": len(token)})

    padded = body + "=" * (-len(body) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise DecodeError(f"Malformed encoded parameter: {e}") from e


def decode_utf8(token: str) -> str:
    """Decode a token whose payload is UTF-8 text (a URL)."""
    raw = decode(token)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise UtfError(f"Encoded parameter is not valid UTF-8: {e.reason}") from e


def encode_json(value: Any) -> str:
    """Serialize ``value`` to JSON and encode it."""
    return encode(json.dumps(value, separators=(",", ":"), ensure_ascii=False))


def decode_utf8_json(token: str) -> Any:
    """Decode a token whose payload is a JSON document.

    Fails at the first stage that breaks: base64, UTF-8, then JSON.
    """
    text = decode_utf8(token)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise JsonError(f"Encoded parameter is not valid JSON: {e.msg}") from e
    except RecursionError as e:
        raise JsonError("Encoded parameter is nested too deeply") from e


def decode_attribute_list(token: str) -> List[str]:
    """Decode an encoded attribute list."""
    value = decode_utf8_json(token)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise JsonError("Encoded attribute list must be a JSON array of strings")
    return value
