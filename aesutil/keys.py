"""
Key & IV Resolver
=================
Turns whatever the caller hands over into the exact byte strings AES-256-GCM
needs.

Key:  256 bits (32 bytes). Explicit bytes, an explicit Base64 string, or the
      AESUTIL_AES_ENCRYPTION_KEY environment variable, in that order.
IV:    96 bits (12 bytes). Explicit bytes, an explicit Base64 string, or
      12 fresh bytes from the OS CSPRNG.

Nothing here caches a key or writes one to a log.
"""

import base64
import binascii
import logging
import os
import re
from typing import Callable, Optional, Type, Union

from .errors import (
    AesUtilError,
    MissingKeyError,
    InvalidKeyEncodingError,
    InvalidKeyLengthError,
    InvalidIvEncodingError,
    InvalidIvLengthError,
)

logger = logging.getLogger(__name__)

KEY_BYTE_LEN = 32   # 256-bit key
IV_BYTE_LEN  = 12   # 96-bit IV, per NIST SP 800-38D
KEY_ENV_VAR  = "AESUTIL_AES_ENCRYPTION_KEY"

_BASE64_RE = re.compile(r"[A-Za-z0-9+/=]+")

KeyMaterial = Union[str, bytes, bytearray, memoryview]
KeyProvider = Callable[[], Optional[KeyMaterial]]


def environ_key() -> Optional[str]:
    """Default key provider: the Base64 key in AESUTIL_AES_ENCRYPTION_KEY."""
    return os.environ.get(KEY_ENV_VAR) or None


def decode_base64(value: str, error: Type[AesUtilError]) -> bytes:
    """
    Strict standard-alphabet Base64 decode.
    Raises `error` if the string strays outside [A-Za-z0-9+/=] or is
    badly padded.
    """
    if not _BASE64_RE.fullmatch(value):
        raise error()
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error:
        raise error() from None


def _to_bytes(candidate: KeyMaterial, error: Type[AesUtilError]) -> bytes:
    """A Base64 string is decoded; only bytes-like objects are taken as raw."""
    if isinstance(candidate, str):
        return decode_base64(candidate, error)
    if isinstance(candidate, (bytes, bytearray, memoryview)):
        return bytes(candidate)
    raise error(f"Expected bytes or a Base64 string, got {type(candidate).__name__}")


def resolve_key(candidate: Optional[KeyMaterial] = None,
                key_provider: Optional[KeyProvider] = environ_key) -> bytes:
    """
    Return the 32-byte key.

    An empty or missing candidate falls back to key_provider. Pass
    key_provider=None to disable the fallback entirely.
    """
    source = "explicit"
    if candidate is None or candidate in ("", b""):
        candidate = key_provider() if key_provider is not None else None
        source = "environment" if key_provider is environ_key else "provider"
    if not candidate:
        raise MissingKeyError()

    key = _to_bytes(candidate, InvalidKeyEncodingError)

    if len(key) != KEY_BYTE_LEN:
        raise InvalidKeyLengthError()
    logger.debug("Resolved AES-256 key from %s source", source)
    return key


def resolve_iv(candidate: Optional[KeyMaterial] = None) -> bytes:
    """Return the 12-byte IV, generating a random one if none is pinned."""
    if candidate is None:
        return os.urandom(IV_BYTE_LEN)

    iv = _to_bytes(candidate, InvalidIvEncodingError)

    if len(iv) != IV_BYTE_LEN:
        raise InvalidIvLengthError()
    logger.debug("Using caller-pinned IV")
    return iv


def generate_key() -> bytes:
    return os.urandom(KEY_BYTE_LEN)


def generate_encoded_key() -> str:
    """A fresh key, Base64-encoded for AESUTIL_AES_ENCRYPTION_KEY."""
    return base64.b64encode(generate_key()).decode("ascii")
