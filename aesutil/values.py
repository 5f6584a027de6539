"""
One-shot helpers around AesUtil with the default configuration
(text envelopes, UTF-8 plaintext). Omit key to use
AESUTIL_AES_ENCRYPTION_KEY.
"""

from typing import Optional

from .cipher import AesUtil, AesUtilParams, AssociatedData
from .envelope import Envelope
from .keys import KeyMaterial


def encrypt_value(value: str, associated_data: AssociatedData = None,
                  key: Optional[KeyMaterial] = None,
                  iv: Optional[KeyMaterial] = None) -> str:
    return AesUtil(AesUtilParams(key=key)).encrypt(value, associated_data, iv)


def decrypt_value(value: Envelope, associated_data: AssociatedData = None,
                  key: Optional[KeyMaterial] = None) -> str:
    return AesUtil(AesUtilParams(key=key)).decrypt(value, associated_data)
