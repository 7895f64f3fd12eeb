import os
import pathlib
from urllib.parse import urlparse, unquote

from .errors import InvalidInput

# RSA-16384 PEM is under 13 KiB; anything far larger is not a key file
MAX_KEY_FILE_BYTES = 64 * 1024


def _norm(p: pathlib.Path) -> pathlib.Path:
    return p.expanduser().resolve(strict=False)

def parse_file_uri(uri_or_path: str) -> pathlib.Path:
    if uri_or_path.startswith("file://"):
        parsed = urlparse(uri_or_path)
        path = parsed.path or ""
        if os.name == "nt":
            import re
            m = re.match(r"^/([A-Za-z]:/.*)$", path)
            if m:
                path = m.group(1)
        return pathlib.Path(unquote(path))
    return pathlib.Path(uri_or_path)

def resolve_path(path_like: str | os.PathLike[str]) -> pathlib.Path:
    return _norm(parse_file_uri(str(path_like)))

def read_key_file(path_like: str | os.PathLike[str]) -> tuple[pathlib.Path, bytes]:
    p = resolve_path(path_like)
    if not p.is_file():
        raise InvalidInput(f"not a readable file: {p}", {"path": str(p)})
    size = p.stat().st_size
    if size > MAX_KEY_FILE_BYTES:
        raise InvalidInput(f"file too large for a key: {size} bytes", {"path": str(p), "size": size})
    return p, p.read_bytes()
