"""Error taxonomy for public key line formatting.

Every failure of the formatter is raised as one of the classes below, so a
caller always gets "no key line produced" together with a reason.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class SSHKeyError(Exception):
    """Base class for all sshpub errors.

    Attributes:
        code: stable machine-readable error code
        message: human-readable message
        details: optional context (never key material)
    """

    code = "SSHKEY_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


class InvalidInput(SSHKeyError):
    """A required argument is absent or malformed."""

    code = "INVALID_INPUT"


class UnsupportedKeyType(SSHKeyError):
    """The type tag is neither ``ssh-rsa`` nor ``ssh-ed25519``."""

    code = "UNSUPPORTED_KEY_TYPE"

    def __init__(self, tag: Any, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(f"Unsupported key type: {tag!r}", {"key_type": str(tag), **(details or {})})
        self.tag = tag


class KeyExtractionFailed(SSHKeyError):
    """The key handle cannot yield the parameters its declared type requires."""

    code = "KEY_EXTRACTION_FAILED"


class AllocationFailure(SSHKeyError):
    code = "ALLOCATION_FAILURE"


class EncodingFailure(SSHKeyError):
    code = "ENCODING_FAILURE"
