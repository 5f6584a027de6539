"""
Plaintext encodings
===================
How a plaintext string becomes the bytes fed to the cipher, and how the
recovered bytes become a string again.

Text encodings (utf8, utf16le, latin1, ascii) encode the characters.
Binary-to-text encodings (hex, base64, base64url) are *parsed*, so the hex
string "deadbeef" is encrypted as the four bytes DE AD BE EF rather than as
eight ASCII characters.

Encoding a plaintext is strict, Base64 alphabets included; decoding
recovered bytes substitutes U+FFFD for anything the chosen encoding
cannot represent.
"""

import base64
from typing import Callable, Dict, NamedTuple

from .errors import UnsupportedEncodingError

DEFAULT_ENCODING = "utf8"


class PlaintextEncoding(NamedTuple):
    name:   str
    encode: Callable[[str], bytes]
    decode: Callable[[bytes], str]


def _codec(name: str, codec: str) -> PlaintextEncoding:
    return PlaintextEncoding(
        name,
        lambda text: text.encode(codec),
        lambda data: data.decode(codec, errors="replace"),
    )


def _base64url_encode(text: str) -> bytes:
    if "+" in text or "/" in text:
        raise ValueError("not a base64url string")
    return base64.b64decode(text + "=" * (-len(text) % 4), altchars=b"-_", validate=True)


def _base64url_decode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


_ENCODINGS = {
    enc.name: enc for enc in (
        _codec("utf8",    "utf-8"),
        _codec("utf16le", "utf-16-le"),
        _codec("latin1",  "latin-1"),
        _codec("ascii",   "ascii"),
        PlaintextEncoding("hex", bytes.fromhex, bytes.hex),
        PlaintextEncoding(
            "base64",
            lambda text: base64.b64decode(text, validate=True),
            lambda data: base64.b64encode(data).decode("ascii"),
        ),
        PlaintextEncoding("base64url", _base64url_encode, _base64url_decode),
    )
}

_ALIASES: Dict[str, str] = {
    "utf-8":    "utf8",
    "utf-16le": "utf16le",
    "ucs2":     "utf16le",
    "ucs-2":    "utf16le",
    "binary":   "latin1",
}

SUPPORTED_ENCODINGS = frozenset(_ENCODINGS) | frozenset(_ALIASES)


def get_encoding(name: str) -> PlaintextEncoding:
    key = name.lower()
    key = _ALIASES.get(key, key)
    try:
        return _ENCODINGS[key]
    except KeyError:
        raise UnsupportedEncodingError(
            f"Unsupported plaintext encoding: {name}. "
            f"Must be one of: {', '.join(sorted(SUPPORTED_ENCODINGS))}"
        ) from None
