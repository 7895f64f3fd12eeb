from __future__ import annotations
import base64
import pytest
from fastmcp import Client

from sshpub.formats.openssh import format_public_key
from sshpub.formats.pem import private_key_to_pem, public_key_to_pem
from _util import ed25519_key, reference_line


@pytest.mark.asyncio
async def test_format_from_local_path_pem(tmp_path):
    p = tmp_path / "id_ed25519.pem"
    p.write_text(private_key_to_pem(ed25519_key()))
    from sshpub.server import mcp
    async with Client(mcp) as client:
        res = await client.call_tool("format_from_local_path", {"path": str(p)})
        meta = res.data
        assert meta["path"] == str(p.resolve())
        assert meta["format"] == "PEM"
        assert meta["type"] == "ssh-ed25519"
        assert meta["authorized_key"] == reference_line(ed25519_key())
        assert meta["fingerprint_sha256"].startswith("SHA256:")
        assert meta["warnings"] == []


@pytest.mark.asyncio
async def test_format_from_b64_string():
    data = public_key_to_pem(ed25519_key()).encode("ascii")
    from sshpub.server import mcp
    async with Client(mcp) as client:
        res = await client.call_tool(
            "format_from_b64_string",
            {"filename": "id.pem", "content_b64": base64.b64encode(data).decode("ascii"), "key_type": "ssh-ed25519"},
        )
        meta = res.data
        assert meta["filename"] == "id.pem"
        assert meta["authorized_key"] == format_public_key(ed25519_key(), "ssh-ed25519")


@pytest.mark.asyncio
async def test_unsupported_key_type_is_reported():
    data = public_key_to_pem(ed25519_key()).encode("ascii")
    from sshpub.server import mcp
    async with Client(mcp) as client:
        res = await client.call_tool(
            "format_from_b64_string",
            {"filename": "id.pem", "content_b64": base64.b64encode(data).decode("ascii"), "key_type": "ssh-dsa"},
        )
        meta = res.data
        assert "authorized_key" not in meta
        assert meta["error"]["code"] == "UNSUPPORTED_KEY_TYPE"


@pytest.mark.asyncio
async def test_mismatched_key_type_is_reported():
    data = public_key_to_pem(ed25519_key()).encode("ascii")
    from sshpub.server import mcp
    async with Client(mcp) as client:
        res = await client.call_tool(
            "format_from_b64_string",
            {"filename": "id.pem", "content_b64": base64.b64encode(data).decode("ascii"), "key_type": "ssh-rsa"},
        )
        assert res.data["error"]["code"] == "KEY_EXTRACTION_FAILED"


@pytest.mark.asyncio
async def test_bad_base64_and_missing_file(tmp_path):
    from sshpub.server import mcp
    async with Client(mcp) as client:
        res = await client.call_tool("format_from_b64_string", {"filename": "x", "content_b64": "not base64!"})
        assert res.data["error"]["code"] == "INVALID_INPUT"
        res = await client.call_tool("format_from_local_path", {"path": str(tmp_path / "nope")})
        assert res.data["error"]["code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_generate_key_returns_public_only():
    from sshpub.server import mcp
    async with Client(mcp) as client:
        res = await client.call_tool("generate_key", {"key_type": "ssh-rsa", "bits": 1024})
        meta = res.data
        assert meta["type"] == "ssh-rsa"
        assert meta["authorized_key"].startswith("ssh-rsa ")
        assert meta["key"]["size"] == 1024
        assert [w["code"] for w in meta["warnings"]] == ["RSA_WEAK_KEY"]
        assert "PRIVATE" not in str(meta)

        res = await client.call_tool("generate_key", {"key_type": "ssh-ed25519"})
        assert res.data["authorized_key"].startswith("ssh-ed25519 ")

        res = await client.call_tool("generate_key", {"key_type": "ssh-dss"})
        assert res.data["error"]["code"] == "UNSUPPORTED_KEY_TYPE"

        res = await client.call_tool("generate_key", {"key_type": "ssh-rsa", "bits": 1_000_000})
        assert res.data["error"]["code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_authorized_keys_prompt():
    from sshpub.server import mcp
    async with Client(mcp) as client:
        res = await client.get_prompt("authorized_keys_entry", {"path": "/tmp/id.pub", "comment": "me@host"})
        text = res.messages[0].content.text
        assert "format_from_local_path" in text
        assert "/tmp/id.pub" in text and "me@host" in text
