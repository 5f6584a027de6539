"""
aesutil — envelope codec and key/IV resolver
============================================
Run with:  python -m pytest tests/ -v
       or:  python tests/test_envelope.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import base64
import logging

import pytest
from aesutil import envelope
from aesutil.envelope import CiphertextParts
from aesutil.errors import (
    MissingKeyError,
    InvalidKeyEncodingError,
    InvalidKeyLengthError,
    InvalidIvEncodingError,
    InvalidIvLengthError,
    MalformedEnvelopeError,
)
from aesutil.keys import (
    KEY_ENV_VAR,
    generate_encoded_key,
    resolve_iv,
    resolve_key,
)

IV    = b"a" * 12
TAG   = bytes(range(16))
CT    = b"ciphertext"
PARTS = CiphertextParts(IV, TAG, CT)
KEY   = b"b" * 32


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


# ── Text envelopes ───────────────────────────────────────────────────────────
def test_text_field_order():
    assert envelope.encode_text(PARTS) == f"{b64(IV)}.{b64(TAG)}.{b64(CT)}"


def test_text_decode():
    assert envelope.decode_text(envelope.encode_text(PARTS)) == PARTS


def test_text_decode_accepts_ascii_bytes():
    assert envelope.decode_text(envelope.encode_text(PARTS).encode()) == PARTS


def test_text_empty_ciphertext_field():
    parts = envelope.decode_text(f"{b64(IV)}.{b64(TAG)}.")
    assert parts.ciphertext == b""


@pytest.mark.parametrize("value", [
    f"{b64(IV)}.{b64(TAG)}",
    f"{b64(IV)}.{b64(TAG)}.{b64(CT)}.{b64(CT)}",
    "",
    "no delimiters at all",
])
def test_text_wrong_field_count(value):
    with pytest.raises(MalformedEnvelopeError):
        envelope.decode_text(value)


def test_text_field_not_base64():
    with pytest.raises(MalformedEnvelopeError):
        envelope.decode_text(f"{b64(IV)}.!!!!.{b64(CT)}")


def test_text_short_iv_field():
    with pytest.raises(MalformedEnvelopeError):
        envelope.decode_text(f"{b64(IV[:8])}.{b64(TAG)}.{b64(CT)}")


def test_text_short_tag_field():
    with pytest.raises(MalformedEnvelopeError):
        envelope.decode_text(f"{b64(IV)}.{b64(TAG[:12])}.{b64(CT)}")


def test_text_non_ascii_bytes():
    with pytest.raises(MalformedEnvelopeError):
        envelope.decode_text(b"\xff" * 40)


# ── Binary envelopes ─────────────────────────────────────────────────────────
def test_binary_layout():
    assert envelope.encode_binary(PARTS) == IV + TAG + CT


def test_binary_decode():
    assert envelope.decode_binary(IV + TAG + CT) == PARTS


def test_binary_minimum_length():
    assert envelope.decode_binary(IV + TAG).ciphertext == b""
    with pytest.raises(MalformedEnvelopeError):
        envelope.decode_binary((IV + TAG)[:27])


def test_binary_rejects_str():
    with pytest.raises(MalformedEnvelopeError):
        envelope.decode_binary(envelope.encode_text(PARTS))


def test_dispatch_by_mode():
    assert envelope.encode(PARTS) == envelope.encode_text(PARTS)
    assert envelope.encode(PARTS, binary_mode=True) == envelope.encode_binary(PARTS)
    assert envelope.decode(IV + TAG + CT, binary_mode=True) == PARTS


# ── Key resolution ───────────────────────────────────────────────────────────
def test_resolve_key_bytes_and_base64():
    assert resolve_key(KEY) == KEY
    assert resolve_key(bytearray(KEY)) == KEY
    assert resolve_key(b64(KEY)) == KEY


def test_resolve_key_explicit_beats_environment(monkeypatch):
    monkeypatch.setenv(KEY_ENV_VAR, b64(b"e" * 32))
    assert resolve_key(KEY) == KEY


def test_resolve_key_from_environment(monkeypatch):
    monkeypatch.setenv(KEY_ENV_VAR, b64(KEY))
    assert resolve_key() == KEY
    assert resolve_key("") == KEY


def test_resolve_key_missing(monkeypatch):
    monkeypatch.delenv(KEY_ENV_VAR, raising=False)
    with pytest.raises(MissingKeyError):
        resolve_key()
    with pytest.raises(MissingKeyError):
        resolve_key(None, key_provider=lambda: None)


def test_resolve_key_provider_disabled(monkeypatch):
    monkeypatch.setenv(KEY_ENV_VAR, b64(KEY))
    with pytest.raises(MissingKeyError):
        resolve_key(None, key_provider=None)


def test_resolve_key_bad_encoding():
    with pytest.raises(InvalidKeyEncodingError):
        resolve_key("!" * 32)
    with pytest.raises(InvalidKeyEncodingError):
        resolve_key("YmJ")


def test_resolve_key_bad_length():
    with pytest.raises(InvalidKeyLengthError):
        resolve_key(b"b" * 24)
    with pytest.raises(InvalidKeyLengthError):
        resolve_key(b64(b"b" * 24))


def test_generated_key_resolves():
    assert len(resolve_key(generate_encoded_key())) == 32


@pytest.mark.parametrize("candidate", [32, 32.0, [98] * 32, object()])
def test_resolve_key_rejects_non_bytes(candidate):
    with pytest.raises(InvalidKeyEncodingError):
        resolve_key(candidate, key_provider=None)


def test_resolve_key_logs_source(monkeypatch, caplog):
    monkeypatch.setenv(KEY_ENV_VAR, b64(KEY))
    with caplog.at_level(logging.DEBUG, logger="aesutil.keys"):
        resolve_key(KEY)
        resolve_key()
        resolve_key(None, key_provider=lambda: KEY)
    messages = [r.getMessage() for r in caplog.records]
    assert messages == [
        "Resolved AES-256 key from explicit source",
        "Resolved AES-256 key from environment source",
        "Resolved AES-256 key from provider source",
    ]
    assert b64(KEY) not in caplog.text


# ── IV resolution ────────────────────────────────────────────────────────────
def test_resolve_iv_random():
    first, second = resolve_iv(), resolve_iv()
    assert len(first) == 12
    assert first != second


def test_resolve_iv_bytes_and_base64():
    assert resolve_iv(IV) == IV
    assert resolve_iv(b64(IV)) == IV


def test_resolve_iv_bad_encoding():
    with pytest.raises(InvalidIvEncodingError):
        resolve_iv("!" * 12)


def test_resolve_iv_bad_length():
    with pytest.raises(InvalidIvLengthError):
        resolve_iv(b"a" * 24)
    with pytest.raises(InvalidIvLengthError):
        resolve_iv(b64(b"a" * 16))


@pytest.mark.parametrize("candidate", [12, 12.0, [97] * 12])
def test_resolve_iv_rejects_non_bytes(candidate):
    with pytest.raises(InvalidIvEncodingError):
        resolve_iv(candidate)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
