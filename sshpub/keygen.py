import logging
from typing import Optional, Union

from cryptography.hazmat.primitives.asymmetric import ed25519, rsa

from .common import KeyType
from .errors import InvalidInput
from .settings import Settings

log = logging.getLogger(__name__)

RSA_PUBLIC_EXPONENT = 65537
RSA_MIN_BITS = 1024
RSA_MAX_BITS = 16384


def generate_rsa(bits: Optional[int] = None) -> rsa.RSAPrivateKey:
    if bits is None:
        bits = Settings.from_env().DEFAULT_RSA_BITS
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise InvalidInput(f"RSA key size must be an integer, got {bits!r}")
    if bits < RSA_MIN_BITS or bits > RSA_MAX_BITS or bits % 8:
        raise InvalidInput(
            f"RSA key size must be a multiple of 8 between {RSA_MIN_BITS} and {RSA_MAX_BITS}",
            {"bits": bits},
        )
    log.debug("generating %d-bit RSA key", bits)
    return rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=bits)


def generate_ed25519() -> ed25519.Ed25519PrivateKey:
    log.debug("generating Ed25519 key")
    return ed25519.Ed25519PrivateKey.generate()


def generate(key_type: Union[KeyType, str], bits: Optional[int] = None):
    kt = KeyType.from_tag(key_type)
    if kt is KeyType.RSA:
        return generate_rsa(bits)
    return generate_ed25519()
