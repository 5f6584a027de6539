"""
aesutil
=======
AES-256-GCM authenticated encryption for string values.

    envelope = encrypt_value("some secret", associated_data="user:42")
    decrypt_value(envelope, associated_data="user:42")   # "some secret"

Envelopes:
    text    base64(iv).base64(tag).base64(ciphertext)   (default)
    binary  iv(12) || tag(16) || ciphertext

The default key is read from the AESUTIL_AES_ENCRYPTION_KEY environment
variable (Base64 of 32 bytes).

License: Apache 2.0
"""

__version__ = "1.0.0"

from .cipher    import AesUtil, AesUtilParams
from .envelope  import CiphertextParts
from .errors    import (
    AesUtilError,
    MissingKeyError,
    InvalidKeyEncodingError,
    InvalidKeyLengthError,
    InvalidIvEncodingError,
    InvalidIvLengthError,
    MalformedEnvelopeError,
    UnsupportedEncodingError,
    InvalidPlaintextError,
    AuthenticationFailure,
)
from .keys      import KEY_ENV_VAR, generate_key, generate_encoded_key, resolve_iv, resolve_key
from .values    import encrypt_value, decrypt_value

__all__ = [
    "AesUtil",
    "AesUtilParams",
    "CiphertextParts",
    "encrypt_value",
    "decrypt_value",
    "resolve_key",
    "resolve_iv",
    "generate_key",
    "generate_encoded_key",
    "KEY_ENV_VAR",
    "AesUtilError",
    "MissingKeyError",
    "InvalidKeyEncodingError",
    "InvalidKeyLengthError",
    "InvalidIvEncodingError",
    "InvalidIvLengthError",
    "MalformedEnvelopeError",
    "UnsupportedEncodingError",
    "InvalidPlaintextError",
    "AuthenticationFailure",
]
