"""
aesutil — Live Demo
===================
Run:  python examples/demo.py

Encrypts and decrypts a value in both envelope modes, with timing and
envelope sizes printed for each, then shows tampering being caught.
"""

import sys, os, time
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aesutil import (
    AesUtil,
    AesUtilParams,
    AuthenticationFailure,
    KEY_ENV_VAR,
    decrypt_value,
    encrypt_value,
    generate_encoded_key,
)

LINE = "═" * 70
MSG  = "some secret"
AAD  = "user:42"

def header(name):
    print(f"\n{LINE}")
    print(f"  {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

os.environ.setdefault(KEY_ENV_VAR, generate_encoded_key())

print(f"\n{LINE}")
print("  aesutil — AES-256-GCM Envelope Demo")
print(LINE)
print(f"  Message: {MSG}\n")

# ── TEXT MODE ────────────────────────────────────────────────────────────────
header("TEXT MODE — base64(iv).base64(tag).base64(ciphertext)")
t0  = time.perf_counter()
ct  = encrypt_value(MSG, AAD)
pt  = decrypt_value(ct, AAD)
elapsed = time.perf_counter() - t0
ok("Envelope",      ct)
ok("Envelope size", f"{len(ct)} chars")
ok("Round-trip",    f"{elapsed*1000:.2f} ms")
ok("Decrypted",     pt)

# ── BINARY MODE ──────────────────────────────────────────────────────────────
header("BINARY MODE — iv(12) || tag(16) || ciphertext")
a   = AesUtil(AesUtilParams(binary_mode=True))
t0  = time.perf_counter()
ct  = a.encrypt(MSG, AAD)
pt  = a.decrypt(ct, AAD)
elapsed = time.perf_counter() - t0
ok("Envelope size", f"{len(ct)} bytes (iv=12 + tag=16 + data={len(ct) - 28})")
ok("Round-trip",    f"{elapsed*1000:.2f} ms")
ok("Decrypted",     pt)

# ── TAMPERING ────────────────────────────────────────────────────────────────
header("TAMPERING — one flipped bit, wrong associated data")
tampered = bytearray(ct)
tampered[-1] ^= 0x01
for label, envelope, aad in (("Flipped ciphertext bit", bytes(tampered), AAD),
                             ("Wrong associated data",  ct, "user:43")):
    try:
        a.decrypt(envelope, aad)
        print(f"  ✗  {label}: NOT detected")
    except AuthenticationFailure as e:
        ok(label, f"rejected ({e})")

print(f"\n{LINE}\n")
