"""
Errors
======
Every failure raised by aesutil derives from AesUtilError.

Input-validation failures also derive from ValueError, the same signal the
cryptography AEAD classes use for a bad key or nonce size.

AuthenticationFailure deliberately covers every reason a tag can fail to
verify: wrong key, wrong or missing associated data, or a corrupted IV,
tag or ciphertext. Messages never carry key, IV or plaintext material.
"""


class AesUtilError(Exception):
    """Base class for all aesutil errors."""

    message = "aesutil error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class MissingKeyError(AesUtilError):
    message = ("Key not provided and AESUTIL_AES_ENCRYPTION_KEY "
               "environment variable not set")


class InvalidKeyEncodingError(AesUtilError, ValueError):
    message = "Key must be a Base64-encoded string"


class InvalidKeyLengthError(AesUtilError, ValueError):
    message = "Key must be 32 bytes when Base64-decoded"


class InvalidIvEncodingError(AesUtilError, ValueError):
    message = "Provided IV must be Base64-encoded if string"


class InvalidIvLengthError(AesUtilError, ValueError):
    message = "Provided IV must be 12 bytes long"


class MalformedEnvelopeError(AesUtilError, ValueError):
    message = "Encrypted value is not a well-formed envelope"


class InvalidPlaintextError(AesUtilError, ValueError):
    message = "Plaintext is not valid in the configured encoding"


class UnsupportedEncodingError(AesUtilError, ValueError):
    message = "Unsupported plaintext encoding"


class AuthenticationFailure(AesUtilError):
    message = "Unsupported state or unable to authenticate data"
