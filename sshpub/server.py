import base64
import binascii
import logging
from pathlib import Path
from typing import Annotated, Optional

from fastmcp import FastMCP
from pydantic import Field

from .errors import InvalidInput, SSHKeyError
from .keygen import generate
from .logging_conf import setup_logging
from .mcp_contracts import KeyLineSummary, ToolError
from .path_utils import read_key_file
from .settings import Settings
from .summary import summarize_bytes, summarize_key

log = logging.getLogger(__name__)

mcp = FastMCP(
    name="SSHPub",
    instructions=(
        "Purpose: turn RSA or Ed25519 key material into an OpenSSH authorized_keys line "
        "(`<type> <base64>`), with its SHA256 fingerprint. No network access, no file writes.\n\n"
        "How to call:\n"
        "- Local key file → `format_from_local_path(path=..., key_type=?, password=?)`.\n"
        "- Base64 key file → `format_from_b64_string(filename=..., content_b64=..., key_type=?, password=?)`.\n"
        "  `content_b64` MUST be RFC 4648 raw base64 of the file bytes (no data: URI, no whitespace/newlines).\n"
        "- Fresh key pair → `generate_key(key_type=..., bits=?)`; only the public half is returned.\n\n"
        "Inputs: PEM (PKCS#8, traditional, SubjectPublicKeyInfo), DER, OpenSSH public lines and "
        "OpenSSH private keys. `key_type` is `ssh-rsa` or `ssh-ed25519`; leave it null to infer it.\n\n"
        "Outputs: `type`, `authorized_key`, `fingerprint_sha256`, `key` and `warnings`, or an "
        "`error` object with `code` and `message` when no line can be produced.\n\n"
        "Safety: read-only; passwords are never logged; private key material is never returned."
    ),
)


def _ok(name_key: Optional[str], name_val: Optional[str], meta: dict) -> dict:
    summary = KeyLineSummary.model_validate(meta).model_dump(exclude_none=True)
    return {name_key: name_val, **summary} if name_key else summary


def _err(name_key: Optional[str], name_val: Optional[str], exc: SSHKeyError) -> dict:
    log.warning("no key line produced: %s (%s)", exc.message, exc.code, extra={"error_code": exc.code})
    err = ToolError(**exc.as_dict()).model_dump()
    return {name_key: name_val, "error": err} if name_key else {"error": err}


def _format_from_bytes(
    name_key: str,
    name_val: str,
    data: bytes,
    key_type: Optional[str],
    password: Optional[str],
) -> dict:
    try:
        meta = summarize_bytes(data, filename=name_val, password=password, key_type=key_type)
    except SSHKeyError as exc:
        return _err(name_key, name_val, exc)
    return _ok(name_key, name_val, meta)


@mcp.tool(description="Liveness check.")
def ping() -> str:
    return "pong"


@mcp.tool(
    description=(
        "Read a local RSA/Ed25519 key file and return its OpenSSH authorized_keys line. "
        "Read-only and idempotent."
    ),
    tags={"sshpub", "openssh", "filesystem"},
    annotations={
        "title": "Format key from local file",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def format_from_local_path(
    path: Annotated[Path, Field(description="Local path to the key file.")],
    key_type: Annotated[
        Optional[str],
        Field(description="`ssh-rsa` or `ssh-ed25519`. Leave null to infer from the key."),
    ] = None,
    password: Annotated[
        Optional[str],
        Field(description="Password for an encrypted private key. Leave null if not required."),
    ] = None,
) -> dict:
    """
    Examples:

    - { "path": "/home/me/.ssh/id_ed25519" }
    - { "path": "/tmp/key.pem", "key_type": "ssh-rsa", "password": "s3cr3t" }
    """
    try:
        p, data = read_key_file(str(path))
    except SSHKeyError as exc:
        return _err("path", str(path), exc)
    return _format_from_bytes("path", str(p), data, key_type, password)


@mcp.tool(
    description=(
        "Decode a base64-encoded RSA/Ed25519 key file and return its OpenSSH authorized_keys line. "
        "Use this when the client cannot expose a local path. Read-only and idempotent."
    ),
    tags={"sshpub", "openssh", "binary"},
    annotations={
        "title": "Format key from base64 content",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def format_from_b64_string(
    filename: Annotated[
        str,
        Field(description="Original filename (used for format heuristics only)."),
    ],
    content_b64: Annotated[str, Field(description="RFC 4648 raw base64-encoded bytes of the file")],
    key_type: Annotated[
        Optional[str],
        Field(description="`ssh-rsa` or `ssh-ed25519`. Leave null to infer from the key."),
    ] = None,
    password: Annotated[
        Optional[str],
        Field(description="Password for an encrypted private key. Leave null if not required."),
    ] = None,
) -> dict:
    try:
        data = base64.b64decode(content_b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        return _err("filename", filename, InvalidInput(f"content_b64 is not valid base64: {exc}"))
    return _format_from_bytes("filename", filename, data, key_type, password)


@mcp.tool(
    description=(
        "Generate a new RSA or Ed25519 key pair and return the public authorized_keys line. "
        "The private key is discarded and never returned."
    ),
    tags={"sshpub", "keygen"},
    annotations={"title": "Generate key", "readOnlyHint": True, "openWorldHint": False},
)
def generate_key(
    key_type: Annotated[str, Field(description="`ssh-rsa` or `ssh-ed25519`.")],
    bits: Annotated[
        Optional[int],
        Field(description="RSA modulus size in bits (1024-16384, multiple of 8); ignored for Ed25519. Null uses the configured default."),
    ] = None,
) -> dict:
    try:
        key = generate(key_type, bits)
        meta = summarize_key(key, key_type)
    except SSHKeyError as exc:
        return _err(None, None, exc)
    return _ok(None, None, meta)


@mcp.prompt(
    name="authorized_keys_entry",
    description=(
        "Produce an authorized_keys entry for a local key file by calling `format_from_local_path`, "
        "then explain where to install it."
    ),
    tags={"sshpub", "prompt"},
)
def authorized_keys_entry(
    path: Annotated[str, Field(description="Local path to the key file.")],
    comment: Annotated[str, Field(description="Optional trailing comment, e.g. user@host.")] = "",
) -> str:
    return (
        "Task: produce an OpenSSH authorized_keys entry.\n\n"
        "1) Call the MCP tool `format_from_local_path` with the following JSON arguments:\n"
        "```json\n"
        "{\n"
        f'  "path": "{path}"\n'
        "}\n"
        "```\n\n"
        "2) Output the returned `authorized_key` line verbatim"
        + (f', followed by a single space and the comment "{comment}"' if comment else "")
        + ", then one sentence giving `fingerprint_sha256` and one listing any `warnings`.\n"
        "If the result contains `error`, output ERROR: <message> and stop. Do not invent a key.\n"
    )


def main() -> None:
    setup_logging(Settings.from_env())
    mcp.run()


if __name__ == "__main__":
    main()
