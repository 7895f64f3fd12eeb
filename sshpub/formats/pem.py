from __future__ import annotations
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
    load_der_private_key,
    load_der_public_key,
    load_pem_private_key,
    load_pem_public_key,
)

from ..crypto_utils import public_half
from ..errors import InvalidInput

BEGIN_PUB_SPKI = b"-----BEGIN PUBLIC KEY-----"
BEGIN_PUB_RSA = b"-----BEGIN RSA PUBLIC KEY-----"


def _password_bytes(password: Optional[str]) -> Optional[bytes]:
    return None if not password else password.encode("utf-8")


def public_key_to_pem(key) -> str:
    """SubjectPublicKeyInfo PEM of the key's public half."""
    pub = public_half(key)
    return pub.public_bytes(Encoding.PEM, PublicFormat.SubjectPublicKeyInfo).decode("ascii")


def private_key_to_pem(key, password: str = "") -> str:
    """PKCS#8 PEM; encrypted with the best available scheme when a password is given."""
    if key is None or not hasattr(key, "private_bytes"):
        raise InvalidInput("a private key handle is required")
    enc = BestAvailableEncryption(password.encode("utf-8")) if password else NoEncryption()
    return key.private_bytes(Encoding.PEM, PrivateFormat.PKCS8, enc).decode("ascii")


def _is_public_pem(data: bytes) -> bool:
    return BEGIN_PUB_SPKI in data or BEGIN_PUB_RSA in data


def load_key(data: bytes, password: Optional[str] = None):
    """Load a PEM private key (PKCS#8 or traditional) or a PEM public key."""
    if not data:
        raise InvalidInput("no key data")
    try:
        if _is_public_pem(data):
            return load_pem_public_key(data)
        return load_pem_private_key(data, password=_password_bytes(password))
    except TypeError as exc:
        # raised both for "password required" and "password given to unencrypted key"
        raise InvalidInput(f"cannot load PEM key: {exc}", {"password_supplied": bool(password)}) from exc
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise InvalidInput(f"cannot load PEM key: {exc}") from exc


def load_der_key(data: bytes, password: Optional[str] = None):
    if not data:
        raise InvalidInput("no key data")
    try:
        return load_der_private_key(data, password=_password_bytes(password))
    except TypeError as exc:
        raise InvalidInput(f"cannot load DER key: {exc}", {"password_supplied": bool(password)}) from exc
    except (ValueError, UnsupportedAlgorithm):
        pass
    try:
        return load_der_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise InvalidInput(f"cannot load DER key: {exc}") from exc
