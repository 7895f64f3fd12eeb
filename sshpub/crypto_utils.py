from __future__ import annotations

from typing import Any, Dict, Tuple

from cryptography.hazmat.primitives.asymmetric import ed25519, rsa
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .common import KeyType
from .errors import InvalidInput, KeyExtractionFailed


# ---------------------------
# Key handle accessors
# ---------------------------

def public_half(key):
    if key is None:
        raise InvalidInput("key handle is missing")
    # private handles expose their public half
    if hasattr(key, "private_bytes") and hasattr(key, "public_key"):
        return key.public_key()
    return key


def rsa_public_params(key) -> Tuple[int, int]:
    """Return ``(e, n)`` of an RSA key handle."""
    pub = public_half(key)
    if not isinstance(pub, rsa.RSAPublicKey):
        raise KeyExtractionFailed(
            "key handle does not hold an RSA key",
            {"handle": pub.__class__.__name__},
        )
    try:
        nums = pub.public_numbers()
    except Exception as exc:
        raise KeyExtractionFailed(f"cannot read RSA parameters: {exc}") from exc
    return nums.e, nums.n


def ed25519_raw_public(key) -> bytes:
    """Return the 32 raw public key bytes of an Ed25519 key handle."""
    pub = public_half(key)
    if not isinstance(pub, ed25519.Ed25519PublicKey):
        raise KeyExtractionFailed(
            "key handle does not hold an Ed25519 key",
            {"handle": pub.__class__.__name__},
        )
    try:
        return pub.public_bytes(Encoding.Raw, PublicFormat.Raw)
    except Exception as exc:
        raise KeyExtractionFailed(f"cannot read Ed25519 public bytes: {exc}") from exc


def infer_key_type(key) -> KeyType:
    pub = public_half(key)
    if isinstance(pub, rsa.RSAPublicKey):
        return KeyType.RSA
    if isinstance(pub, ed25519.Ed25519PublicKey):
        return KeyType.ED25519
    raise KeyExtractionFailed(
        f"no supported SSH key type for {pub.__class__.__name__}",
        {"handle": pub.__class__.__name__},
    )


def key_meta(key) -> Dict[str, Any]:
    pub = public_half(key)
    if isinstance(pub, rsa.RSAPublicKey):
        return {"type": "RSA", "size": pub.key_size, "public_exponent": pub.public_numbers().e}
    if isinstance(pub, ed25519.Ed25519PublicKey):
        return {"type": "Ed25519"}
    return {"type": pub.__class__.__name__}
