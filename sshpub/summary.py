import logging
from typing import Any, Callable, Dict, List, Optional, Union

from .common import KeyType, Warn, fingerprint_sha256
from .crypto_utils import infer_key_type, key_meta
from .errors import InvalidInput
from .format_identify import guess_format
from .formats import openssh as fmt_openssh
from .formats import pem as fmt_pem
from .settings import Settings

log = logging.getLogger(__name__)


def _warnings_for_key(meta: Dict[str, Any], settings: Settings) -> List[dict]:
    warns: List[dict] = []
    if meta.get("type") == "RSA":
        size = int(meta.get("size", 0))
        if size < settings.MIN_RSA_BITS:
            warns.append(
                Warn("RSA_WEAK_KEY", f"RSA key size {size} < {settings.MIN_RSA_BITS}", "warn").as_dict()
            )
        if meta.get("public_exponent") not in (None, 65537):
            warns.append(
                Warn("RSA_UNUSUAL_EXPONENT", f"RSA public exponent is {meta['public_exponent']}", "info").as_dict()
            )
    return warns


def summarize_key(
    key,
    key_type: Union[KeyType, str, None] = None,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    settings = settings or Settings.from_env()
    kt = infer_key_type(key) if key_type is None else KeyType.from_tag(key_type)
    blob = fmt_openssh.public_blob(key, kt)
    meta = key_meta(key)
    out: Dict[str, Any] = {
        "type": kt.value,
        "authorized_key": fmt_openssh.format_blob(kt, blob),
        "fingerprint_sha256": fingerprint_sha256(blob),
        "key": meta,
    }
    warns = _warnings_for_key(meta, settings)
    if warns:
        out["warnings"] = warns
    return out


Loader = Callable[[bytes, Optional[str]], Any]

_LOADERS: Dict[str, Loader] = {
    "OPENSSH": fmt_openssh.load_key,
    "PEM": fmt_pem.load_key,
    "DER": fmt_pem.load_der_key,
}


def load_key_bytes(data: bytes, filename: Optional[str] = None, password: Optional[str] = None):
    fmt = guess_format(data, filename=filename)
    loader = _LOADERS.get(fmt)
    if not loader:
        raise InvalidInput("unrecognized key material", {"format": fmt})
    log.debug("loading %s key material (%d bytes)", fmt, len(data))
    return fmt, loader(data, password)


def summarize_bytes(
    data: bytes,
    filename: Optional[str] = None,
    password: Optional[str] = None,
    key_type: Union[KeyType, str, None] = None,
) -> Dict[str, Any]:
    if data is None:
        raise InvalidInput("no key data")
    fmt, key = load_key_bytes(data, filename=filename, password=password)
    return {"format": fmt, **summarize_key(key, key_type)}
