"""
Envelope Codec
==============
Serializes the three outputs of one AES-GCM encryption into a single value
and splits that value back apart.

Text mode (default), ASCII only, safe for JSON, text columns and logs:

    base64(iv) "." base64(auth_tag) "." base64(ciphertext)

Binary mode, minimum overhead, for stores that accept raw bytes:

    iv(12) || auth_tag(16) || ciphertext

Binary envelopes carry no version or length prefix. The IV and tag sizes
are implied by position, so a reader must know that 12/16 were used.
Neither mode is auto-detected; decode with the mode you encoded with.
"""

import base64
import binascii
from typing import NamedTuple, Union

from .errors import MalformedEnvelopeError
from .keys import IV_BYTE_LEN

TAG_BYTE_LEN = 16   # 128-bit GCM authentication tag
DELIMITER    = "."
MIN_BINARY_LEN = IV_BYTE_LEN + TAG_BYTE_LEN

Envelope = Union[str, bytes]


class CiphertextParts(NamedTuple):
    iv:         bytes
    auth_tag:   bytes
    ciphertext: bytes


# -- text mode ----------------------------------------------------------------

def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _unb64(field: str, name: str) -> bytes:
    try:
        return base64.b64decode(field, validate=True)
    except (binascii.Error, ValueError):
        raise MalformedEnvelopeError(f"Envelope {name} field is not valid Base64") from None


def encode_text(parts: CiphertextParts) -> str:
    return DELIMITER.join((_b64(parts.iv), _b64(parts.auth_tag), _b64(parts.ciphertext)))


def decode_text(envelope: Envelope) -> CiphertextParts:
    """
    Split a dotted envelope into its parts.
    Bytes are accepted if they are pure ASCII.
    """
    if isinstance(envelope, (bytes, bytearray, memoryview)):
        try:
            envelope = bytes(envelope).decode("ascii")
        except UnicodeDecodeError:
            raise MalformedEnvelopeError("Text envelope must be ASCII") from None
    if not isinstance(envelope, str):
        raise MalformedEnvelopeError("Text envelope must be a string")

    fields = envelope.split(DELIMITER)
    if len(fields) != 3:
        raise MalformedEnvelopeError(
            f"Envelope must have 3 dot-separated fields, got {len(fields)}"
        )
    iv_field, tag_field, ct_field = fields
    parts = CiphertextParts(
        _unb64(iv_field, "IV"),
        _unb64(tag_field, "auth tag"),
        _unb64(ct_field, "ciphertext"),
    )
    if len(parts.iv) != IV_BYTE_LEN:
        raise MalformedEnvelopeError(f"Envelope IV must be {IV_BYTE_LEN} bytes")
    if len(parts.auth_tag) != TAG_BYTE_LEN:
        raise MalformedEnvelopeError(f"Envelope auth tag must be {TAG_BYTE_LEN} bytes")
    return parts


# -- binary mode --------------------------------------------------------------

def encode_binary(parts: CiphertextParts) -> bytes:
    return parts.iv + parts.auth_tag + parts.ciphertext


def decode_binary(envelope: Envelope) -> CiphertextParts:
    if not isinstance(envelope, (bytes, bytearray, memoryview)):
        raise MalformedEnvelopeError("Binary envelope must be bytes")
    envelope = bytes(envelope)
    if len(envelope) < MIN_BINARY_LEN:
        raise MalformedEnvelopeError(
            f"Binary envelope too short: need at least {MIN_BINARY_LEN} bytes"
        )
    return CiphertextParts(
        envelope[:IV_BYTE_LEN],
        envelope[IV_BYTE_LEN:MIN_BINARY_LEN],
        envelope[MIN_BINARY_LEN:],
    )


# -- dispatch -----------------------------------------------------------------

def encode(parts: CiphertextParts, binary_mode: bool = False) -> Envelope:
    return encode_binary(parts) if binary_mode else encode_text(parts)


def decode(envelope: Envelope, binary_mode: bool = False) -> CiphertextParts:
    return decode_binary(envelope) if binary_mode else decode_text(envelope)
