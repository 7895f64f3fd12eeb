
import base64
import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from .errors import InvalidInput, UnsupportedKeyType


class KeyType(str, Enum):
    RSA = "ssh-rsa"
    ED25519 = "ssh-ed25519"

    @classmethod
    def from_tag(cls, tag) -> "KeyType":
        if tag is None:
            raise InvalidInput("key type tag is missing")
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, bytes):
            tag = tag.decode("ascii", "replace")
        for kt in cls:
            if kt.value == tag:
                return kt
        raise UnsupportedKeyType(tag)


def fingerprint_sha256(blob: bytes) -> str:
    # same rendering as `ssh-keygen -l`
    return "SHA256:" + base64.b64encode(hashlib.sha256(blob).digest()).decode("ascii").rstrip("=")


Severity = Literal["info", "warn", "error"]

@dataclass
class Warn:
    code: str
    message: str
    severity: Severity = "warn"

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "severity": self.severity}
