"""
AEAD Facade: AES-256-GCM
========================
AES-256 in Galois/Counter Mode, wrapped so that a plaintext string goes in
and a transportable envelope comes out.

GCM produces a 128-bit authentication tag over the ciphertext and any
associated data. Decryption with the wrong key, the wrong (or missing)
associated data, or a tampered envelope fails with AuthenticationFailure,
and the error never says which of these it was.

Key size: 256 bits (32 bytes)
IV:        96 bits (12 bytes), random per message unless pinned
Tag:      128 bits (16 bytes)

An AesUtil holds no mutable state after construction and can be shared
between threads.

Dependencies: cryptography >= 41.0
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .encodings import DEFAULT_ENCODING, get_encoding
from .envelope import TAG_BYTE_LEN, CiphertextParts, Envelope, decode, encode
from .errors import AuthenticationFailure, InvalidPlaintextError
from .keys import KeyMaterial, KeyProvider, environ_key, generate_key, resolve_iv, resolve_key

logger = logging.getLogger(__name__)

AssociatedData = Union[str, bytes, None]


@dataclass(frozen=True)
class AesUtilParams:
    """
    Construction options for AesUtil.

    key:                32 raw bytes or their Base64 string. Falls back to
                        key_provider when omitted.
    binary_mode:        emit iv||tag||ciphertext bytes instead of the
                        dotted Base64 string.
    plaintext_encoding: how plaintext strings map to bytes (utf8, hex, ...).
    key_provider:       where to look for a key when none is given;
                        None disables the fallback.
    """
    key:                Optional[KeyMaterial] = None
    binary_mode:        bool = False
    plaintext_encoding: str = DEFAULT_ENCODING
    key_provider:       Optional[KeyProvider] = environ_key


def _aad(associated_data: AssociatedData) -> Optional[bytes]:
    if not associated_data:
        return None
    if isinstance(associated_data, str):
        return associated_data.encode("utf-8")
    return bytes(associated_data)


class AesUtil:
    """AES-256-GCM authenticated encryption with self-describing envelopes."""

    ALGORITHM = "aes-256-gcm"

    def __init__(self, params: AesUtilParams = None):
        if params is None:
            params = AesUtilParams()
        self._encoding    = get_encoding(params.plaintext_encoding)
        self._key         = resolve_key(params.key, params.key_provider)
        self._aesgcm      = AESGCM(self._key)
        self._binary_mode = params.binary_mode

    @property
    def key(self) -> bytes:
        return self._key

    @property
    def binary_mode(self) -> bool:
        return self._binary_mode

    @property
    def plaintext_encoding(self) -> str:
        return self._encoding.name

    @staticmethod
    def generate_key() -> bytes:
        return generate_key()

    def encrypt(self, plaintext: str, associated_data: AssociatedData = None,
                iv: Optional[KeyMaterial] = None) -> Envelope:
        """
        Encrypt and authenticate plaintext.

        associated_data is authenticated but not encrypted; the same value
        must be supplied to decrypt. Pin iv only for reproducible output:
        reusing an IV under one key breaks GCM.
        Returns a str envelope, or bytes in binary mode.
        """
        iv = resolve_iv(iv)
        data = self._encode_plaintext(plaintext)
        # AESGCM appends the tag to the ciphertext
        sealed = self._aesgcm.encrypt(iv, data, _aad(associated_data))
        parts = CiphertextParts(iv, sealed[-TAG_BYTE_LEN:], sealed[:-TAG_BYTE_LEN])
        logger.debug("Encrypted %d plaintext bytes (binary_mode=%s)",
                     len(data), self._binary_mode)
        return encode(parts, self._binary_mode)

    def _encode_plaintext(self, plaintext: str) -> bytes:
        # raised outside the handler so the codec error, which quotes the
        # plaintext, is not attached as __context__
        try:
            return self._encoding.encode(plaintext)
        except ValueError:
            pass
        raise InvalidPlaintextError(f"Plaintext is not valid {self._encoding.name}")

    def decrypt(self, envelope: Envelope, associated_data: AssociatedData = None) -> str:
        """
        Verify and decrypt an envelope produced by encrypt().
        Raises MalformedEnvelopeError if it cannot be parsed, and
        AuthenticationFailure if the tag does not verify.
        """
        parts = decode(envelope, self._binary_mode)
        try:
            data = self._aesgcm.decrypt(
                parts.iv, parts.ciphertext + parts.auth_tag, _aad(associated_data)
            )
        except InvalidTag as exc:
            logger.warning("AES-GCM authentication failed")
            raise AuthenticationFailure() from exc
        return self._encoding.decode(data)
